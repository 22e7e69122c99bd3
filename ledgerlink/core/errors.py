from typing import Any


class LedgerLinkError(Exception):
    """Base class for every error raised by ledgerlink."""


class CodecError(LedgerLinkError):
    """Raised when a value cannot be encoded or a byte buffer cannot be decoded."""


class ShortBufferError(CodecError):
    """
    Raised when a decoder needs more bytes than are available.

    Attributes:
        codec: short description of the decoder that failed
        expected: number of bytes the decoder needs
        available: number of bytes left after the offset
    """

    def __init__(self, codec: str, expected: int, available: int) -> None:
        self.codec = codec
        self.expected = expected
        self.available = available
        super().__init__(
            f"Codec [{codec}] expected {expected} bytes, got {available}."
        )


class DomainValidationError(CodecError):
    """A decoded or constructed value violates a domain invariant."""

    def __init__(self, message: str, value: Any) -> None:
        self.value = value
        super().__init__(message)


class OutOfRangeError(DomainValidationError):
    def __init__(self, name: str, value: Any, minimum: int, maximum: int) -> None:
        self.name = name
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{name} expected a value between {minimum} and {maximum}, got {value!r}.",
            value,
        )


class LamportsOutOfRangeError(OutOfRangeError):
    def __init__(self, value: Any) -> None:
        super().__init__("lamports", value, 0, 2**64 - 1)


class UnknownVariantError(CodecError):
    """Raised for a discriminator (or wire index) that matches no variant."""

    def __init__(self, discriminator: Any, known: list[Any]) -> None:
        self.discriminator = discriminator
        self.known = known
        super().__init__(
            f"Unknown variant {discriminator!r}, expected one of {known!r}."
        )


class TransportError(LedgerLinkError):
    """
    The underlying transport failed to open a subscription or to send
    a request. Surfaced either as a raised exception or as the payload
    of a publisher's "error" channel.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class CancellationError(LedgerLinkError):
    """
    The operation was aborted through its own AbortSignal.

    Kept distinct from TransportError so callers can ignore expected
    cancellations.
    """

    def __init__(self, reason: Any = None) -> None:
        self.reason = reason
        super().__init__(f"Operation aborted: {reason!r}" if reason is not None else "Operation aborted")
