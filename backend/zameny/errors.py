from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from zameny.parsing.pipeline import DistributionMismatch


class ZamenyError(Exception):
    """Base class for all errors raised by the replacements service."""


class FetchError(ZamenyError):
    """The bulletin could not be downloaded."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class ExtractionError(ZamenyError):
    """The bulletin was downloaded but its text could not be read."""


class DistributionMismatchError(ZamenyError):
    def __init__(self, mismatch: "DistributionMismatch", message: Optional[str] = None) -> None:
        super().__init__(message or mismatch.describe())
        self.mismatch = mismatch
