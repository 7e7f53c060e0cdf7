"""Git Gallery error hierarchy."""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCategory(StrEnum):
    """Category of error for classification and handling."""

    EVENT_SOURCE = "event_source"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class GalleryError(Exception):
    """Base error for all gitgallery exceptions."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.details: dict[str, Any] = details or {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, category={self.category!r})"


class EventLoadError(GalleryError):
    """An event file or record could not be read or normalized."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        index: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, category=ErrorCategory.EVENT_SOURCE, **kwargs)
        self.source = source
        self.index = index


class ConfigurationError(GalleryError):
    """Invalid or missing configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(message, category=ErrorCategory.CONFIGURATION)
