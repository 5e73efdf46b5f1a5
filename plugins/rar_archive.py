# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import List, Optional

import rarfile

from core.archive_base import ArchivePlugin
from core.config import ARCHIVE_TIMEOUT
from core.models import ExtractionUnit, FileHandle, KINDS
from core.plugin_base import register
from core.tools import UNRAR

class RarArchive(ArchivePlugin):
    """RAR headers are parsed by ``rarfile``; member data needs ``unrar``."""

    name = "rar-archive"
    kinds = frozenset(KINDS["RAR"])
    label = "RAR"

    def missing_capability(self) -> Optional[str]:
        return None if UNRAR.available() else "unrar"

    def list_entries(self, handle: FileHandle) -> List[ExtractionUnit]:
        with rarfile.RarFile(handle.path, "r") as rf:
            return [
                ExtractionUnit(name=info.filename, size_bytes=info.file_size or 0, is_dir=info.is_dir())
                for info in rf.infolist()
            ]

    def read_entry(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        res = UNRAR.run(
            ["p", "-inul", "-p-", "--", handle.path, unit.name],
            timeout=ARCHIVE_TIMEOUT,
            max_output=limit + 1,
        )
        if res.truncated:
            return res.stdout
        if not res.ok:
            raise RuntimeError(res.error or f"unrar exited with {res.returncode}")
        return res.stdout

register(RarArchive())
