# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Attachment extraction orchestrator.

Exposes one function:
    extract_attachment(path: str, name: str | None = None, quota: Quota | None = None) -> str

Flow:
1) discover and load the ExtractorPlugin modules under plugins/;
2) classify the display name into a type tag (``tar.gz``, ``pdf``, ``json``...);
3) hand the file to the highest-priority plugin whose can_handle(tag) is true.

The result is always a string: extracted text or a bracketed placeholder.
Plugins report ordinary failures through ExtractResult; anything they raise
is logged here and degrades to the generic placeholder.
"""

import logging
from pathlib import Path
from typing import Optional

from core.models import FileHandle
from core.plugin_base import ExtractResult, Failure
from core.plugin_loader import discover_plugins, find_plugin
from core.quota import Quota
from core.utils.filetypes import detect_kind, kind_family

log = logging.getLogger(__name__)

UNREADABLE = "[Could not read file]"

# ---------------- internal state ----------------
_PLUGINS_READY = False

def _ensure_plugins() -> None:
    """Load plugins on first use; later calls are no-ops."""
    global _PLUGINS_READY
    if not _PLUGINS_READY:
        try:
            discover_plugins()
        finally:
            _PLUGINS_READY = True

# ---------------- public API ----------------
def extract_file(path: str, name: Optional[str] = None, quota: Optional[Quota] = None) -> ExtractResult:
    """Run the pipeline and keep the typed result (for callers that want ``meta``)."""
    _ensure_plugins()
    try:
        handle = FileHandle.from_path(path, name)
    except OSError as e:
        log.warning("Cannot stat %s: %s", path, e)
        return ExtractResult.failed(Failure.UNREADABLE, UNREADABLE)

    kind = detect_kind(handle.name)
    plugin = find_plugin(kind)
    if plugin is None:
        return ExtractResult.failed(Failure.UNREADABLE, UNREADABLE)
    log.info(
        "Extracting %s (%s/%s, %d bytes) with %s",
        handle.name, kind_family(kind), kind or "-", handle.size_bytes, plugin.name,
    )

    try:
        return plugin.extract(handle, quota if quota is not None else Quota())
    except Exception:
        log.exception("Plugin %s failed on %s", plugin.name, handle.name)
        return ExtractResult.failed(Failure.UNREADABLE, UNREADABLE, handler=plugin.name)

def extract_attachment(path: str, name: Optional[str] = None, quota: Optional[Quota] = None) -> str:
    """Text to embed in a chat message for the file at ``path``. Never raises."""
    return extract_file(path, name=name, quota=quota).text

def attachment_record(path: str) -> dict:
    p = Path(path)
    return {"path": str(p), "name": p.name, "content": extract_attachment(str(p), p.name)}

__all__ = ["extract_attachment", "extract_file", "attachment_record", "UNREADABLE"]
