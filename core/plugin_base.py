# -*- coding: utf-8 -*-
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Any, Dict, Optional

from core.models import FileHandle
from core.quota import Quota


class Failure(str, Enum):
    TOOL_UNAVAILABLE = "tool_unavailable"
    SIZE_EXCEEDED = "size_exceeded"
    BINARY_CONTENT = "binary_content"
    EXTRACTION_FAILURE = "extraction_failure"
    UNPARSEABLE_DOCUMENT = "unparseable_document"
    MALFORMED_DATA = "malformed_data"
    UNREADABLE = "unreadable"


@dataclass
class ExtractResult:
    """Plugin extraction result.

    ``text`` is what ends up in the chat message: the extracted content on
    success, or a bracketed placeholder when ``failure`` is set. ``meta`` holds
    plugin specific details (handler name, page count, extraction tier...).
    """

    text: str
    failure: Optional[Failure] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, failure: Failure, placeholder: str, **meta: Any) -> "ExtractResult":
        return cls(text=placeholder, failure=failure, meta=meta)


class ExtractorPlugin(Protocol):
    name: str
    version: str
    priority: int
    def can_handle(self, kind: str) -> bool: ...
    def extract(self, handle: FileHandle, quota: Quota) -> ExtractResult: ...

REGISTRY: list[ExtractorPlugin] = []

def register(plugin: ExtractorPlugin) -> None:
    REGISTRY.append(plugin)
    REGISTRY.sort(key=lambda p: p.priority, reverse=True)
