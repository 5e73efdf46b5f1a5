from __future__ import annotations

import json
import logging

from core.models import KINDS

log = logging.getLogger(__name__)

REFORMAT_KINDS = set(KINDS["JSON"])
# line-delimited JSON must keep one record per line
PASSTHROUGH_KINDS = set(KINDS["JSONL"]) | set(KINDS["STRUCTURED"])


def reformat_json(text: str) -> tuple[str, bool]:
    """Pretty-print JSON with a stable 2-space indent.

    Returns ``(text, ok)``; on a parse error (or nesting too deep to parse)
    the input comes back untouched with ``ok`` False.
    """
    try:
        data = json.loads(text)
        return json.dumps(data, indent=2, ensure_ascii=False), True
    except (ValueError, RecursionError) as e:
        log.debug("JSON reformat skipped: %s", e)
        return text, False


def normalize_text(kind: str, text: str) -> tuple[str, bool]:
    if kind in REFORMAT_KINDS:
        return reformat_json(text)
    return text, True


__all__ = ["reformat_json", "normalize_text", "REFORMAT_KINDS", "PASSTHROUGH_KINDS"]
