# -*- coding: utf-8 -*-
"""PDF text through a chain of progressively cruder strategies.

1. ``pdftotext -layout`` (poppler) when installed.
2. PyPDF2, run in a child Python process so a pathological file can only
   cost the timeout. The child is this module run as a script.
3. Printable ASCII runs scraped from the raw bytes.

The first strategy that returns non-empty text wins.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import re
import sys
from pathlib import Path
from typing import Optional, Tuple

from core.config import PDF_PARSER_TIMEOUT, PDFTOTEXT_TIMEOUT
from core.models import FileHandle
from core.plugin_base import ExtractResult, Failure, register
from core.quota import Quota
from core.tools import PDFTOTEXT, run_bounded
from core.utils.filetypes import MB, truncate_text

log = logging.getLogger(__name__)

_ASCII_RUN = re.compile(rb"[\x20-\x7e]{8,}")
_RAW_MIN_CHARS = 100

# (text, page count or None)
TierResult = Optional[Tuple[str, Optional[int]]]


def scrape_ascii(data: bytes) -> str:
    return " ".join(m.decode("ascii") for m in _ASCII_RUN.findall(data))


def parse_pdf(path: str, max_chars: int | None = None) -> dict:
    from PyPDF2 import PdfReader
    reader = PdfReader(path)
    parts = []
    size = 0
    for page in reader.pages:
        ptxt = page.extract_text() or ""
        if ptxt:
            parts.append(ptxt)
            size += len(ptxt)
        if max_chars and size >= max_chars:
            break
    text = "\n\n".join(parts)
    if max_chars:
        text = text[:max_chars]
    return {"pages": len(reader.pages), "text": text}


def cli() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True)
    ap.add_argument("--max-chars", type=int, default=0)
    args = ap.parse_args()
    payload = parse_pdf(args.input, max_chars=args.max_chars or None)
    sys.stdout.write(json.dumps(payload, ensure_ascii=False))
    return 0


class PdfBasic:
    name = "pdf-basic"
    version = "0.2.0"
    priority = 90

    def can_handle(self, kind: str) -> bool:
        return kind == "pdf"

    def extract(self, handle: FileHandle, quota: Quota) -> ExtractResult:
        if handle.size_bytes > 2 * quota.file_limit:
            return ExtractResult.failed(
                Failure.SIZE_EXCEEDED,
                f"[PDF too large: {handle.size_bytes / MB:.1f} MB — limit is {2 * quota.file_limit / MB:g} MB]",
                handler=self.name,
            )

        for tier in (self._layout_text, self._parsed_text, self._raw_text):
            got = tier(handle, quota)
            if got and got[0].strip():
                text, pages = got
                text = truncate_text(text.strip(), quota.file_limit)
                quota.consume(len(text.encode("utf-8")))
                header = f"[PDF: {handle.name}, {handle.size_bytes / 1024:.0f} KB"
                header += f", {pages} pages]" if pages else "]"
                return ExtractResult(
                    text=f"{header}\n\n{text}",
                    meta={"handler": self.name, "tier": tier.__name__.strip("_"), "pages": pages},
                )

        return ExtractResult.failed(
            Failure.UNPARSEABLE_DOCUMENT,
            f"[Could not extract text from PDF: {handle.name} — "
            f"install poppler-utils (pdftotext) for better PDF support]",
            handler=self.name,
        )

    # ---------------- tiers ----------------
    def _layout_text(self, handle: FileHandle, quota: Quota) -> TierResult:
        if not PDFTOTEXT.available():
            return None
        res = PDFTOTEXT.run(
            ["-layout", "-q", handle.path, "-"],
            timeout=PDFTOTEXT_TIMEOUT,
            max_output=quota.file_limit,
        )
        if not res.ok:
            log.debug("pdftotext gave up on %s (rc=%s)", handle.name, res.returncode)
            return None
        text = res.stdout.decode("utf-8", errors="replace")
        pages = text.count("\f") or None
        return text.replace("\f", "\n"), pages

    def _parsed_text(self, handle: FileHandle, quota: Quota) -> TierResult:
        cmd = [
            sys.executable, str(Path(__file__).resolve()),
            "--input", handle.path, "--max-chars", str(quota.file_limit),
        ]
        env = os.environ.copy()
        root = str(Path(__file__).resolve().parents[1])
        env["PYTHONPATH"] = os.pathsep.join(p for p in (root, env.get("PYTHONPATH")) if p)
        # JSON escaping can grow every character to six bytes
        res = run_bounded(cmd, timeout=PDF_PARSER_TIMEOUT, max_output=6 * quota.file_limit + 1024, env=env)
        if not res.ok or res.truncated:
            log.debug("PyPDF2 child failed for %s (rc=%s)", handle.name, res.returncode)
            return None
        try:
            payload = json.loads(res.stdout.decode("utf-8"))
        except ValueError:
            return None
        return payload.get("text") or "", payload.get("pages")

    def _raw_text(self, handle: FileHandle, quota: Quota) -> TierResult:
        with open(handle.path, "rb") as f:
            data = f.read(quota.file_limit)
        text = scrape_ascii(data)
        if len(text) <= _RAW_MIN_CHARS:
            return None
        return text, None

register(PdfBasic())

if __name__ == "__main__":
    raise SystemExit(cli())
