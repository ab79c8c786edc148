"""Error taxonomy shared by every layer of the codec."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Closed set of reasons an encode or decode can fail."""

    # Structural
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    NO_SEPARATOR = "no_separator"
    # Charset / case
    HRP_ILLEGAL_CHAR = "hrp_illegal_char"
    ILLEGAL_CHAR = "illegal_char"
    MIXED_CASE = "mixed_case"
    # HRP sizing
    HRP_TOO_SHORT = "hrp_too_short"
    HRP_TOO_LONG = "hrp_too_long"
    # Integrity
    PADDING_ERROR = "padding_error"
    CHECKSUM_FAILURE = "checksum_failure"
    # Capacity
    BUFFER_INADEQUATE = "buffer_inadequate"
    # Address
    ILLEGAL_VERSION = "illegal_version"
    PROGRAM_TOO_SHORT = "program_too_short"
    PROGRAM_TOO_LONG = "program_too_long"
    PROGRAM_ILLEGAL_SIZE = "program_illegal_size"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @property
    def is_capacity(self) -> bool:
        """True when retrying with a larger buffer could succeed."""
        return self is ErrorKind.BUFFER_INADEQUATE


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.TOO_SHORT: "encoding is too short",
    ErrorKind.TOO_LONG: "encoding is too long",
    ErrorKind.NO_SEPARATOR: "encoding contains no separator",
    ErrorKind.HRP_ILLEGAL_CHAR: "human-readable prefix contains an illegal character",
    ErrorKind.ILLEGAL_CHAR: "encoding contains an illegal character",
    ErrorKind.MIXED_CASE: "encoding uses mixed case",
    ErrorKind.HRP_TOO_SHORT: "human-readable prefix is empty",
    ErrorKind.HRP_TOO_LONG: "human-readable prefix is too long",
    ErrorKind.PADDING_ERROR: "padding error",
    ErrorKind.CHECKSUM_FAILURE: "checksum verification failed",
    ErrorKind.BUFFER_INADEQUATE: "buffer size is inadequate",
    ErrorKind.ILLEGAL_VERSION: "witness version is illegal",
    ErrorKind.PROGRAM_TOO_SHORT: "witness program is too short",
    ErrorKind.PROGRAM_TOO_LONG: "witness program is too long",
    ErrorKind.PROGRAM_ILLEGAL_SIZE: "witness program is of illegal size",
}


class Bech32Error(ValueError):
    """Raised by the session and address layers when an operation fails."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind
