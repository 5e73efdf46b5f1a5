from __future__ import annotations

import posixpath

from core.models import KINDS, TEXT_EXTENSIONS, TEXT_FILENAMES

SNIFF_BYTES = 8 * 1024
COMPOUND_SUFFIXES = {"tar.gz", "tar.bz2", "tar.xz", "tar.zst"}

KB = 1024
MB = 1024 * 1024


def detect_kind(name: str) -> str:
    """Type tag from a file name; ``tar.gz`` style suffixes win over ``gz``."""
    base = posixpath.basename((name or "").replace("\\", "/")).lower().lstrip(".")
    parts = base.split(".")
    if len(parts) < 2:
        return ""
    compound = ".".join(parts[-2:])
    if compound in COMPOUND_SUFFIXES:
        return compound
    return parts[-1]


def kind_family(kind: str) -> str:
    for family, kinds in KINDS.items():
        if kind in kinds:
            return family
    return "TEXT"


def looks_binary(data: bytes) -> bool:
    # prefix only: binary data after the first 8 KiB is not detected
    return b"\x00" in data[:SNIFF_BYTES]


def is_text_entry(name: str) -> bool:
    base = posixpath.basename(name.replace("\\", "/")).lower()
    if base in TEXT_FILENAMES:
        return True
    return detect_kind(base) in TEXT_EXTENSIONS


def decode_text(data: bytes, truncated: bool = False) -> str:
    """UTF-8, or Latin-1 when that fails; never raises."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        # a budget cut can split the last multi-byte character
        if truncated and e.start >= len(data) - 3:
            try:
                return data[:e.start].decode("utf-8")
            except UnicodeDecodeError:
                pass
        return data.decode("latin-1")


def truncate_text(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` UTF-8 bytes without splitting a character."""
    data = text.encode("utf-8")
    if len(data) <= limit:
        return text
    return data[:limit].decode("utf-8", errors="ignore")


def human_size(n: int) -> str:
    if n >= MB:
        return f"{n / MB:.1f} MB"
    if n >= KB:
        return f"{n / KB:.1f} KB"
    return f"{n} B"


def limit_label(n: int) -> str:
    if n >= MB:
        return f"{n / MB:g} MB"
    return f"{n / KB:g} KB"
