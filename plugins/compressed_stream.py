# -*- coding: utf-8 -*-
from __future__ import annotations
import bz2, gzip, logging, lzma, zlib

from core.models import FileHandle, KINDS
from core.plugin_base import ExtractResult, Failure, register
from core.quota import Quota
from core.utils.filetypes import decode_text, detect_kind, looks_binary

log = logging.getLogger(__name__)

_OPENERS = {
    "gz": ("gzip", gzip.open),
    "bz2": ("bzip2", bz2.open),
    "xz": ("xz", lzma.open),
}
_CHUNK = 256 * 1024

class CompressedStream:
    """Single-file gzip/bzip2/xz streams without an archive layer.

    The whole stream is decoded so the reported length is exact, but only the
    first ``quota.file_limit`` bytes are kept in memory.
    """

    name = "compressed-stream"
    version = "0.2.0"
    priority = 70

    def can_handle(self, kind: str) -> bool:
        return kind in KINDS["STREAM"]

    def extract(self, handle: FileHandle, quota: Quota) -> ExtractResult:
        label, opener = _OPENERS[detect_kind(handle.name)]
        head = bytearray()
        total = 0
        try:
            with opener(handle.path, "rb") as f:
                for chunk in iter(lambda: f.read(_CHUNK), b""):
                    total += len(chunk)
                    room = quota.file_limit - len(head)
                    if room > 0:
                        head.extend(chunk[:room])
        except (OSError, EOFError, lzma.LZMAError, zlib.error, ValueError) as e:
            log.info("Decompressing %s failed: %s", handle.name, e)
            return ExtractResult.failed(
                Failure.EXTRACTION_FAILURE, f"[Could not decompress {handle.name}]", handler=self.name
            )

        data = bytes(head)
        truncated = total > len(data)
        if looks_binary(data):
            return ExtractResult.failed(
                Failure.BINARY_CONTENT, f"[Binary {label} file — {total} bytes]", handler=self.name
            )
        quota.consume(len(data))
        return ExtractResult(
            text=decode_text(data, truncated=truncated),
            meta={"handler": self.name, "decompressed_bytes": total, "truncated": truncated},
        )


register(CompressedStream())
