"""
Encoder and decoder sessions.

Thin wrappers over the engine states that size their own buffers and raise
`Bech32Error` instead of returning error kinds. A session that raised is
finished; start a new one with `reset()`.
"""

from __future__ import annotations

import structlog

from bech32codec.engine import DecoderState, EncoderState, encoded_size
from bech32codec.errors import Bech32Error, ErrorKind
from bech32codec.variants import Variant, resolve_variant

logger = structlog.get_logger()


class Encoder:
    """Incremental Bech32 encoder with a growable output buffer."""

    def __init__(self, hrp: str | None = None, nbits_reserve: int = 0, variant: Variant | None = None) -> None:
        self.variant = resolve_variant(variant)
        self._state: EncoderState | None = None
        self._buffer = bytearray()
        if hrp is not None:
            self.reset(hrp, nbits_reserve)

    def reset(self, hrp: str, nbits_reserve: int = 0) -> None:
        """Start a new encoding under `hrp`, preallocating room for `nbits_reserve` data bits."""
        self._state = None
        size = encoded_size(len(hrp), nbits_reserve, 0, self.variant)
        if size is None:
            raise Bech32Error(ErrorKind.BUFFER_INADEQUATE)
        self._buffer = bytearray(size)
        state = EncoderState(self.variant)
        error = state.begin(self._buffer, hrp)
        if error is not None:
            raise Bech32Error(error)
        self._state = state

    def _active(self) -> EncoderState:
        if self._state is None:
            msg = "Encoder has no active session; call reset() first"
            raise RuntimeError(msg)
        return self._state

    def _fail(self, kind: ErrorKind) -> Bech32Error:
        self._state = None
        return Bech32Error(kind)

    def _reserve(self, state: EncoderState, nbits: int) -> None:
        # data symbols still to come plus the checksum tail
        needed = state.position + (nbits + 4) // 5 + self.variant.checksum_size
        if len(self._buffer) < needed:
            self._buffer.extend(bytes(needed - len(self._buffer)))

    def write(self, data: bytes | bytearray, nbits: int | None = None) -> None:
        """Append `nbits` bits of `data` (all of it by default)."""
        state = self._active()
        if nbits is None:
            nbits = len(data) * 8
        self._reserve(state, state.pending_bits + nbits)
        error = state.write(data, nbits)
        if error is not None:
            raise self._fail(error)

    def finish(self, constant: int | None = None) -> str:
        """Append the checksum and return the lowercase encoding."""
        state = self._active()
        if constant is None:
            constant = self.variant.modified_constant
        self._reserve(state, state.pending_bits)
        result = state.finish(constant)
        self._state = None
        if isinstance(result, ErrorKind):
            if result is ErrorKind.CHECKSUM_FAILURE:
                logger.error("encoder_self_check_failed", variant=self.variant.name, constant=hex(constant))
            raise Bech32Error(result)
        return result


class Decoder:
    """Incremental Bech32 decoder over one encoded string."""

    def __init__(self, text: str | None = None, variant: Variant | None = None) -> None:
        self.variant = resolve_variant(variant)
        self._state: DecoderState | None = None
        self._prefix = ""
        if text is not None:
            self.reset(text)

    def reset(self, text: str) -> None:
        """Start decoding `text`, validating its overall structure."""
        self._state = None
        state = DecoderState(self.variant)
        result = state.begin(text)
        if isinstance(result, ErrorKind):
            raise Bech32Error(result)
        self._prefix = text[:result]
        self._state = state

    @property
    def prefix(self) -> str:
        """The human-readable prefix, as written in the input."""
        return self._prefix

    def _active(self) -> DecoderState:
        if self._state is None:
            msg = "Decoder has no active session; call reset() first"
            raise RuntimeError(msg)
        return self._state

    def _fail(self, kind: ErrorKind) -> Bech32Error:
        self._state = None
        return Bech32Error(kind)

    def bits_remaining(self) -> int:
        return self._active().bits_remaining()

    def read_into(self, out: bytearray, nbits: int) -> None:
        """Decode the next `nbits` bits into `out`; a partial last byte is LSB-aligned."""
        error = self._active().read(out, nbits)
        if error is not None:
            raise self._fail(error)

    def read(self, nbits: int | None = None) -> bytes:
        """Decode `nbits` bits, or every remaining whole byte when omitted."""
        remaining = self._active().bits_remaining()
        if nbits is None:
            nbits = remaining & ~7
        elif nbits > remaining:
            raise self._fail(ErrorKind.TOO_SHORT)
        out = bytearray((nbits + 7) // 8)
        self.read_into(out, nbits)
        return bytes(out)

    def finish(self, constant: int | None = None) -> int:
        """Verify padding and checksum; return the number of padding bits."""
        state = self._active()
        if constant is None:
            constant = self.variant.modified_constant
        result = state.finish(constant)
        self._state = None
        if isinstance(result, ErrorKind):
            raise Bech32Error(result)
        return result
