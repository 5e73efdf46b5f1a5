# -*- coding: utf-8 -*-
from __future__ import annotations
from core.models import FileHandle
from core.normalize import normalize_text
from core.plugin_base import ExtractResult, Failure, register
from core.quota import Quota
from core.utils.filetypes import MB, SNIFF_BYTES, decode_text, detect_kind, limit_label, looks_binary

class TextBasic:
    """Catch-all: plain text and code, plus JSON/XML/CSV through the normalizer."""

    name = "text-basic"
    version = "0.2.0"
    priority = 0

    def can_handle(self, kind: str) -> bool:
        return True

    def extract(self, handle: FileHandle, quota: Quota) -> ExtractResult:
        with open(handle.path, "rb") as f:
            head = f.read(SNIFF_BYTES)
            if looks_binary(head):
                return ExtractResult.failed(
                    Failure.BINARY_CONTENT, f"[Binary file — {handle.size_bytes} bytes]", handler=self.name
                )
            if handle.size_bytes > quota.file_limit:
                return ExtractResult.failed(
                    Failure.SIZE_EXCEEDED,
                    f"[File too large: {handle.size_bytes / MB:.1f} MB — limit is {limit_label(quota.file_limit)}]",
                    handler=self.name,
                )
            data = head + f.read(max(0, quota.file_limit + 1 - len(head)))
        if len(data) > quota.file_limit:
            # grew after it was selected
            return ExtractResult.failed(
                Failure.SIZE_EXCEEDED,
                f"[File too large: over {limit_label(quota.file_limit)}]",
                handler=self.name,
            )
        quota.consume(len(data))
        text, ok = normalize_text(detect_kind(handle.name), decode_text(data))
        meta = {"handler": self.name, "bytes": len(data)}
        if not ok:
            # unparseable JSON is forwarded as-is
            meta["failure"] = Failure.MALFORMED_DATA.value
        return ExtractResult(text=text, meta=meta)

register(TextBasic())
