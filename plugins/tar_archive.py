# -*- coding: utf-8 -*-
from __future__ import annotations
import os
import re
from typing import List, Optional

from core.archive_base import ArchivePlugin
from core.config import ARCHIVE_TIMEOUT
from core.models import ExtractionUnit, FileHandle, KINDS
from core.plugin_base import register
from core.tools import TAR

_LISTING_MAX_BYTES = 16 * 1024 * 1024


def _tar_env() -> dict:
    # GNU tar escapes non-ASCII member names as octal in the C locale
    return {**os.environ, "LC_ALL": "C.UTF-8"}


# GNU: -rw-r--r-- user/group   1234 2024-01-31 12:00 path
# BSD: -rw-r--r--  0 user group 1234 Jan 31 12:00 path
_VERBOSE_LINE = re.compile(
    r"^(?P<type>[-dlhbcps])[-rwxsStT]{9}\S*\s+.*?\s(?P<size>\d+)\s+"
    r"(?:\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}(?::\d{2})?"
    r"|[A-Z][a-z]{2}\s+\d{1,2}\s+(?:\d{1,2}:\d{2}|\d{4}))"
    r"\s(?P<name>.+)$"
)


def parse_tar_listing(text: str) -> List[ExtractionUnit]:
    """Parse ``tar -tvf`` output, one member per line; unparseable lines are skipped."""
    units: List[ExtractionUnit] = []
    for line in text.splitlines():
        m = _VERBOSE_LINE.match(line.rstrip("\r"))
        if not m:
            continue
        kind, name = m.group("type"), m.group("name")
        if kind == "l":
            name = name.split(" -> ", 1)[0]
        elif kind == "h":
            name = name.split(" link to ", 1)[0]
        if kind == "d" or name.endswith("/"):
            units.append(ExtractionUnit(name=name, size_bytes=0, is_dir=True))
        elif kind == "-":
            units.append(ExtractionUnit(name=name, size_bytes=int(m.group("size"))))
        else:
            # links and device nodes carry no content of their own
            units.append(ExtractionUnit(name=name, size_bytes=0))
    return units


class TarArchive(ArchivePlugin):
    name = "tar-archive"
    kinds = frozenset(KINDS["TAR"])
    label = "TAR"

    def missing_capability(self) -> Optional[str]:
        return None if TAR.available() else "tar"

    def list_entries(self, handle: FileHandle) -> List[ExtractionUnit]:
        res = TAR.run(
            ["-tvf", handle.path],
            timeout=ARCHIVE_TIMEOUT,
            max_output=_LISTING_MAX_BYTES,
            env=_tar_env(),
        )
        if not res.ok:
            raise RuntimeError(res.error or f"tar exited with {res.returncode}")
        text = res.stdout.decode("utf-8", errors="replace")
        if res.truncated:
            # last line was cut mid-way
            text = text.rsplit("\n", 1)[0]
        return parse_tar_listing(text)

    def read_entry(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        res = TAR.run(
            ["-xOf", handle.path, "--", unit.name],
            timeout=ARCHIVE_TIMEOUT,
            max_output=limit + 1,
            env=_tar_env(),
        )
        if res.truncated:
            return res.stdout
        if not res.ok:
            raise RuntimeError(res.error or f"tar exited with {res.returncode}")
        return res.stdout

register(TarArchive())
