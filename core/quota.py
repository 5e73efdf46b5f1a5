# -*- coding: utf-8 -*-
"""Byte budgets for a single top-level extraction call.

A :class:`Quota` is created by the orchestrator for every file and handed to
the plugin that processes it. Archive plugins share one instance across all
of their entries, so the per-file cap bounds the total extracted from the
archive while the per-entry cap bounds each member.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import MAX_ENTRY_BYTES, MAX_FILE_BYTES


@dataclass
class Quota:
    file_limit: int = MAX_FILE_BYTES
    entry_limit: int = MAX_ENTRY_BYTES
    used: int = 0
    exhausted: bool = False

    @property
    def remaining(self) -> int:
        return max(0, self.file_limit - self.used)

    def entry_too_large(self, size: int) -> bool:
        return size > self.entry_limit

    def admits(self, size: int) -> bool:
        """True if ``size`` more bytes fit; the first refusal exhausts the quota."""
        if self.exhausted:
            return False
        if self.used + size > self.file_limit:
            self.exhausted = True
            return False
        return True

    def consume(self, size: int) -> None:
        self.used += size
        if self.used >= self.file_limit:
            self.exhausted = True


__all__ = ["Quota"]
