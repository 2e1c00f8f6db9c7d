from __future__ import annotations


class ImpositionError(ValueError):
    """Base class for every error raised before output is produced."""

    kind: str = "imposition_error"


class EmptyDocumentError(ImpositionError):
    kind = "empty_document"

    def __init__(self, message: str = "The PDF contains no pages") -> None:
        super().__init__(message)


class PageCountOutOfRangeError(ImpositionError):
    kind = "page_count_out_of_range"

    def __init__(self, page_count: int, message: str) -> None:
        super().__init__(message)
        self.page_count = page_count


class UnknownFormatError(ImpositionError):
    kind = "unknown_format"

    def __init__(self, format_id: str, known: tuple[str, ...]) -> None:
        valid = ", ".join(known)
        super().__init__(f"unknown format '{format_id}', expected one of: {valid}")
        self.format_id = format_id


class MalformedImpositionError(ImpositionError):
    kind = "malformed_imposition"


class LoadError(ImpositionError):
    kind = "load_error"
