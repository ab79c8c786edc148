"""
Streaming, bit-granular Bech32 encoder and decoder states.

This layer never raises for malformed input or short buffers: each fallible
operation returns an `ErrorKind` in place of its success value. The session
and address layers turn those into `Bech32Error`.
"""

from __future__ import annotations

import sys

from bech32codec.checksum import is_mixed_case, polymod, polymod_hrp
from bech32codec.errors import ErrorKind
from bech32codec.variants import BECH32, HRP_MIN_SIZE, Variant

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
SEPARATOR = "1"

_ENCODE = CHARSET.encode("ascii")
_DECODE: dict[str, int] = {}
for _value, _char in enumerate(CHARSET):
    _DECODE[_char] = _value
    _DECODE[_char.upper()] = _value
del _value, _char


def encoded_size(n_hrp: int, nbits: int, n_pad: int = 0, variant: Variant = BECH32) -> int | None:
    """
    Size in characters of the encoding of `nbits` data bits under an `n_hrp`-character prefix.

    `n_pad` extra characters are added for the caller's own use. Returns None
    if the size is beyond anything a buffer could hold.
    """
    size = n_hrp + 1 + (nbits + 4) // 5 + variant.checksum_size + n_pad
    if size > sys.maxsize:
        return None
    return size


def _check_hrp(variant: Variant, hrp: str) -> ErrorKind | None:
    if len(hrp) < HRP_MIN_SIZE:
        return ErrorKind.HRP_TOO_SHORT
    if len(hrp) > variant.hrp_max_size:
        return ErrorKind.HRP_TOO_LONG
    for c in hrp:
        if not "\x21" <= c <= "\x7e":
            return ErrorKind.HRP_ILLEGAL_CHAR
    return None


class EncoderState:
    """Encoder writing into a caller-owned buffer of ASCII codes."""

    def __init__(self, variant: Variant = BECH32) -> None:
        self.variant = variant
        self._out = bytearray()
        self._pos = 0
        self._nbits = 0
        self._bits = 0
        self._chk = 0

    @property
    def position(self) -> int:
        """Number of characters written to the buffer so far."""
        return self._pos

    @property
    def pending_bits(self) -> int:
        """Bits consumed but not yet emitted as a symbol (0-4)."""
        return self._nbits

    @property
    def remaining(self) -> int:
        """Number of characters still free in the buffer."""
        return len(self._out) - self._pos

    def begin(self, out: bytearray, hrp: str) -> ErrorKind | None:
        """Validate `hrp`, write it (lowercased) and the separator to `out`."""
        error = _check_hrp(self.variant, hrp)
        if error is not None:
            return error
        if len(out) - len(hrp) < 1 + self.variant.checksum_size:
            return ErrorKind.BUFFER_INADEQUATE
        for i, c in enumerate(hrp):
            out[i] = ord(c.lower())
        out[len(hrp)] = ord(SEPARATOR)
        self._out = out
        self._pos = len(hrp) + 1
        self._nbits = 0
        self._bits = 0
        self._chk = polymod_hrp(self.variant, 1, hrp)
        return None

    def _emit(self) -> None:
        while self._nbits >= 5:
            self._nbits -= 5
            v = self._bits >> self._nbits & 0x1F
            self._chk = polymod(self.variant, self._chk) ^ v
            self._out[self._pos] = _ENCODE[v]
            self._pos += 1
        self._bits &= (1 << self._nbits) - 1

    def write(self, data: bytes | bytearray, nbits: int) -> ErrorKind | None:
        """
        Feed `nbits` bits of `data`, most significant first.

        If `nbits` is not a multiple of 8, the valid bits of the last byte are
        its least significant ones.
        """
        if nbits < 0 or len(data) < (nbits + 7) // 8 or self.remaining < (self._nbits + nbits) // 5:
            return ErrorKind.BUFFER_INADEQUATE
        i = 0
        while True:
            self._emit()
            if nbits >= 8:
                self._bits = self._bits << 8 | data[i]
                self._nbits += 8
                nbits -= 8
                i += 1
            elif nbits:
                self._bits = self._bits << nbits | data[i] & ((1 << nbits) - 1)
                self._nbits += nbits
                nbits = 0
                i += 1
            else:
                return None

    def finish(self, constant: int) -> str | ErrorKind:
        """Flush pending bits, append the checksum and return the encoding."""
        if self.remaining < (self._nbits > 0) + self.variant.checksum_size:
            return ErrorKind.BUFFER_INADEQUATE
        if self._nbits:
            self._bits <<= 5 - self._nbits
            self._nbits = 5
            self._emit()
        tail = self._chk
        for _ in range(self.variant.checksum_size):
            tail = polymod(self.variant, tail)
        self._bits = tail ^ constant
        self._nbits = self.variant.checksum_bits
        self._emit()
        if self._chk != constant:
            return ErrorKind.CHECKSUM_FAILURE
        return bytes(self._out[: self._pos]).decode("ascii")


class DecoderState:
    """Decoder reading symbols from an encoded string."""

    def __init__(self, variant: Variant = BECH32) -> None:
        self.variant = variant
        self._in = ""
        self._pos = 0
        self._n_in = 0
        self._nbits = 0
        self._bits = 0
        self._chk = 0

    def begin(self, text: str) -> int | ErrorKind:
        """Validate the structure of `text` and return the length of its prefix."""
        variant = self.variant
        if len(text) < variant.min_size:
            return ErrorKind.TOO_SHORT
        if len(text) > variant.max_size:
            return ErrorKind.TOO_LONG
        n_hrp = text.rfind(SEPARATOR)
        if n_hrp < 0:
            return ErrorKind.NO_SEPARATOR
        hrp = text[:n_hrp]
        error = _check_hrp(variant, hrp)
        if error is not None:
            return error
        for c in text[n_hrp + 1 :]:
            if c not in _DECODE:
                return ErrorKind.ILLEGAL_CHAR
        if is_mixed_case(text):
            return ErrorKind.MIXED_CASE
        n_data = len(text) - n_hrp - 1 - variant.checksum_size
        if n_data < 0:
            return ErrorKind.TOO_SHORT
        self._in = text
        self._pos = n_hrp + 1
        self._n_in = n_data
        self._nbits = 0
        self._bits = 0
        self._chk = polymod_hrp(variant, 1, hrp)
        return n_hrp

    def bits_remaining(self) -> int:
        """Data bits left to read, padding included, checksum excluded."""
        return self._nbits + self._n_in * 5

    def _pull(self, nbits: int) -> bool:
        while self._nbits < nbits:
            v = _DECODE.get(self._in[self._pos], -1)
            self._pos += 1
            self._n_in -= 1
            if v < 0:
                return False
            self._chk = polymod(self.variant, self._chk) ^ v
            self._bits = self._bits << 5 | v
            self._nbits += 5
        return True

    def read(self, out: bytearray, nbits: int) -> ErrorKind | None:
        """
        Place the next `nbits` data bits into `out`.

        If `nbits` is not a multiple of 8, the bits of the last byte are
        aligned to its least significant bit.
        """
        if nbits < 0 or len(out) < (nbits + 7) // 8:
            return ErrorKind.BUFFER_INADEQUATE
        if nbits > self._nbits and self._n_in < (nbits - self._nbits + 4) // 5:
            return ErrorKind.BUFFER_INADEQUATE
        i = 0
        while True:
            if not self._pull(min(nbits, 8)):
                return ErrorKind.ILLEGAL_CHAR
            if nbits >= 8:
                self._nbits -= 8
                out[i] = self._bits >> self._nbits & 0xFF
                nbits -= 8
                i += 1
            elif nbits:
                self._nbits -= nbits
                out[i] = self._bits >> self._nbits & ((1 << nbits) - 1)
                nbits = 0
                i += 1
            else:
                return None
            self._bits &= (1 << self._nbits) - 1

    def finish(self, constant: int) -> int | ErrorKind:
        """Check padding and checksum; return the number of padding bits."""
        n_pad = self._nbits
        if self._n_in or n_pad > 4 or self._bits & ((1 << n_pad) - 1):
            return ErrorKind.PADDING_ERROR
        self._n_in = self.variant.checksum_size
        self._nbits = 0
        if not self._pull(self.variant.checksum_bits):
            return ErrorKind.ILLEGAL_CHAR
        self._nbits = 0
        self._bits = 0
        if self._chk != constant:
            return ErrorKind.CHECKSUM_FAILURE
        return n_pad
