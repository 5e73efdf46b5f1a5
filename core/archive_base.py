# -*- coding: utf-8 -*-
"""Shared listing/extraction loop for archive plugins.

Subclasses provide these hooks:

``missing_capability()``
    ``None`` when the family can be processed, otherwise the name of what is
    missing (used verbatim in the placeholder).
``list_entries(handle)``
    Every member as an :class:`ExtractionUnit`, in archive order.
``read_entry(handle, unit, limit)``
    The member's bytes, at most ``limit + 1`` of them so an entry that lied
    about its size is still caught. Raise on failure; the loop turns the
    exception into an inline marker for that entry only.
``extraction_supported(handle)`` and ``extract_hint()``
    Optional; when the first returns False only the listing is emitted,
    followed by the hint.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.models import ExtractionUnit, FileHandle
from core.plugin_base import ExtractResult, Failure
from core.quota import Quota
from core.utils.filetypes import (
    decode_text, human_size, is_text_entry, limit_label, looks_binary,
)

log = logging.getLogger(__name__)


class ArchivePlugin:
    name = "archive"
    version = "0.2.0"
    priority = 80
    kinds: frozenset = frozenset()
    label = "Archive"

    def can_handle(self, kind: str) -> bool:
        return kind in self.kinds

    # ---------------- hooks ----------------
    def missing_capability(self) -> Optional[str]:
        return None

    def extraction_supported(self, handle: FileHandle) -> bool:
        return True

    def extract_hint(self) -> str:
        return "contents were not extracted"

    def list_entries(self, handle: FileHandle) -> List[ExtractionUnit]:
        raise NotImplementedError

    def read_entry(self, handle: FileHandle, unit: ExtractionUnit, limit: int) -> bytes:
        raise NotImplementedError

    # ---------------- contract ----------------
    def extract(self, handle: FileHandle, quota: Quota) -> ExtractResult:
        missing = self.missing_capability()
        if missing:
            return ExtractResult.failed(
                Failure.TOOL_UNAVAILABLE,
                f"[{self.label} archive: {handle.name} — {missing} is not installed, cannot read contents]",
                handler=self.name,
            )
        try:
            units = self.list_entries(handle)
        except Exception as e:
            log.warning("Listing %s failed: %s", handle.name, e)
            return ExtractResult.failed(
                Failure.EXTRACTION_FAILURE,
                f"[Could not read {self.label} archive: {handle.name}]",
                handler=self.name,
            )

        parts = [self._header(handle, units)]
        if self.extraction_supported(handle):
            parts.extend(self._extract_units(handle, units, quota))
        else:
            parts.append(f"[Listing only — {self.extract_hint()}]")

        return ExtractResult(
            text="\n".join(parts).rstrip("\n") + "\n",
            meta={
                "handler": self.name,
                "entries": len(units),
                "extracted": sum(1 for u in units if u.text is not None),
                "bytes": quota.used,
            },
        )

    def _header(self, handle: FileHandle, units: List[ExtractionUnit]) -> str:
        lines = [f"[{self.label} archive: {handle.name} — {len(units)} entries]", "", "Contents:"]
        for u in units:
            if u.is_dir:
                lines.append(f"  {u.name}")
            else:
                lines.append(f"  {u.name} ({human_size(u.size_bytes)})")
        lines.append("")
        return "\n".join(lines)

    def _extract_units(self, handle: FileHandle, units: List[ExtractionUnit], quota: Quota) -> List[str]:
        out: List[str] = []
        limit_hit = False
        for unit in units:
            if quota.exhausted:
                unit.skip("limit reached")
                limit_hit = True
                continue
            if unit.is_dir:
                unit.skip("directory")
                continue
            if unit.size_bytes == 0:
                unit.skip("empty")
                continue
            if not is_text_entry(unit.name):
                unit.skip("unsupported type")
                continue
            if quota.entry_too_large(unit.size_bytes):
                unit.skip("too large")
                out.append(
                    f"[SKIPPED {unit.name} — too large "
                    f"({human_size(unit.size_bytes)}, limit {limit_label(quota.entry_limit)})]\n"
                )
                continue
            if not quota.admits(unit.size_bytes):
                unit.skip("limit reached")
                limit_hit = True
                continue

            try:
                data = self.read_entry(handle, unit, quota.entry_limit)
            except Exception as e:
                log.info("Entry %s in %s failed: %s", unit.name, handle.name, e)
                unit.fail(str(e) or e.__class__.__name__)
                out.append(f"[FAILED TO EXTRACT: {unit.name}]\n")
                continue

            # declared sizes come from the archive and are not trusted
            if quota.entry_too_large(len(data)):
                unit.skip("too large")
                out.append(
                    f"[SKIPPED {unit.name} — too large "
                    f"(more than {limit_label(quota.entry_limit)})]\n"
                )
                continue
            if not quota.admits(len(data)):
                unit.skip("limit reached")
                limit_hit = True
                continue
            if looks_binary(data):
                unit.skip("binary content")
                out.append(f"[SKIPPED {unit.name} — binary content]\n")
                continue

            quota.consume(len(data))
            unit.accept(decode_text(data))
            body = unit.text.rstrip("\n")
            out.append(
                f"=== START OF FILE: {unit.name} ===\n"
                f"{body}\n"
                f"=== END OF FILE: {unit.name} ===\n"
            )

        if limit_hit:
            out.append(
                f"[Extraction limit reached ({limit_label(quota.file_limit)}) — remaining entries skipped]"
            )
        return out


__all__ = ["ArchivePlugin"]
