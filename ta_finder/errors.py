from __future__ import annotations


class TaFinderError(Exception):
    """Base class for ingestion failures."""


class RowDecodeError(TaFinderError):
    def __init__(self, row_number: int, reason: str) -> None:
        super().__init__(f"row {row_number}: {reason}")
        self.row_number = row_number
        self.reason = reason


class FileAccessError(TaFinderError):
    pass


class EncodingError(TaFinderError):
    def __init__(self, message: str, encoding_info: dict | None = None) -> None:
        super().__init__(message)
        self.encoding_info = encoding_info or {}
