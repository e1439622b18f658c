from __future__ import annotations

from collections.abc import Sequence


class ConversionError(RuntimeError):
    code = "CONVERSION_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class ContainerError(ConversionError):
    """Raised when the input bytes are not a readable zip archive."""

    code = "INVALID_ARCHIVE"


class EntryNotFoundError(ConversionError):
    code = "ENTRY_NOT_FOUND"

    def __init__(self, key: str) -> None:
        super().__init__(f"Entry not found in package: {key}")
        self.key = key


class MalformedSlideKeyError(ConversionError):
    code = "MALFORMED_SLIDE_KEY"

    def __init__(self, keys: Sequence[str]) -> None:
        joined = ", ".join(keys)
        super().__init__(f"Slide part name carries no valid ordinal: {joined}")
        self.keys = list(keys)


class DuplicateSlideOrdinalError(ConversionError):
    code = "DUPLICATE_SLIDE_ORDINAL"

    def __init__(self, ordinal: int, keys: Sequence[str]) -> None:
        joined = ", ".join(keys)
        super().__init__(f"Slide ordinal {ordinal} is claimed by several parts: {joined}")
        self.ordinal = ordinal
        self.keys = list(keys)


class SlideLimitError(ConversionError):
    code = "SLIDE_LIMIT"


class InputError(ConversionError):
    code = "INVALID_INPUT"


class OutputWriteError(ConversionError):
    code = "OUTPUT_WRITE"


class ConversionTimeoutError(ConversionError):
    code = "TIMEOUT"


class ConversionFailedError(ConversionError):
    """Umbrella error surfaced to callers; ``cause`` keeps the underlying failure."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"PPTX conversion failed: {cause}")
        self.cause = cause
        self.code = getattr(cause, "code", "INTERNAL")


_CLIENT_ERRORS: tuple[type[ConversionError], ...] = (
    ContainerError,
    EntryNotFoundError,
    MalformedSlideKeyError,
    DuplicateSlideOrdinalError,
    SlideLimitError,
    InputError,
)


def is_client_error(exc: BaseException) -> bool:
    """True when the failure stems from the submitted document rather than the service."""

    if isinstance(exc, ConversionFailedError):
        exc = exc.cause
    return isinstance(exc, _CLIENT_ERRORS)


__all__ = [
    "ConversionError",
    "ContainerError",
    "EntryNotFoundError",
    "MalformedSlideKeyError",
    "DuplicateSlideOrdinalError",
    "SlideLimitError",
    "InputError",
    "OutputWriteError",
    "ConversionTimeoutError",
    "ConversionFailedError",
    "is_client_error",
]
