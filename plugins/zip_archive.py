# -*- coding: utf-8 -*-
from __future__ import annotations
import zipfile
from typing import List

from core.archive_base import ArchivePlugin
from core.models import ExtractionUnit, FileHandle, KINDS
from core.plugin_base import register

class ZipArchive(ArchivePlugin):
    """zip, jar, war and epub, read from the central directory with ``zipfile``."""

    name = "zip-archive"
    kinds = frozenset(KINDS["ZIP"])
    label = "ZIP"

    def list_entries(self, handle: FileHandle) -> List[ExtractionUnit]:
        with zipfile.ZipFile(handle.path, "r") as zf:
            return [
                ExtractionUnit(name=info.filename, size_bytes=info.file_size, is_dir=info.is_dir())
                for info in zf.infolist()
            ]

    def read_entry(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        with zipfile.ZipFile(handle.path, "r") as zf:
            with zf.open(unit.name, "r") as f:
                return f.read(limit + 1)

register(ZipArchive())
