# -*- coding: utf-8 -*-
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import List

import py7zr

from core.archive_base import ArchivePlugin
from core.config import ARCHIVE_TIMEOUT
from core.models import ExtractionUnit, FileHandle, KINDS
from core.plugin_base import register
from core.tools import SEVEN_ZIP

class SevenZipArchive(ArchivePlugin):
    """Listing and member reads through ``py7zr``.

    A 7z binary on PATH takes over member reads so they run under the archive
    timeout. Encrypted members are never read; those archives are listed only.
    """

    name = "7z-archive"
    kinds = frozenset(KINDS["7Z"])
    label = "7z"

    def extraction_supported(self, handle: FileHandle) -> bool:
        with py7zr.SevenZipFile(handle.path, mode="r") as z:
            return not z.needs_password()

    def extract_hint(self) -> str:
        return "archive is password-protected"

    def list_entries(self, handle: FileHandle) -> List[ExtractionUnit]:
        with py7zr.SevenZipFile(handle.path, mode="r") as z:
            return [
                ExtractionUnit(
                    name=info.filename,
                    size_bytes=int(info.uncompressed or 0),
                    is_dir=bool(info.is_directory),
                )
                for info in z.list()
            ]

    def read_entry(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        if SEVEN_ZIP.available():
            return self._read_with_binary(handle, unit, limit)
        return self._read_in_process(handle, unit, limit)

    def _read_with_binary(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        res = SEVEN_ZIP.run(
            ["e", "-so", "-bd", "--", handle.path, unit.name],
            timeout=ARCHIVE_TIMEOUT,
            max_output=limit + 1,
        )
        if res.truncated:
            return res.stdout
        if not res.ok:
            raise RuntimeError(res.error or f"7z exited with {res.returncode}")
        return res.stdout

    def _read_in_process(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        # py7zr only extracts to disk; the member is at most its declared size
        with tempfile.TemporaryDirectory(prefix="yaog-7z-") as tmp:
            with py7zr.SevenZipFile(handle.path, mode="r") as z:
                z.extract(path=tmp, targets=[unit.name])
            with open(Path(tmp) / unit.name, "rb") as f:
                return f.read(limit + 1)

register(SevenZipArchive())
