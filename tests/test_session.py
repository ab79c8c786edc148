"""Session tests: BIP-173 / BIP-350 encodings through Encoder and Decoder."""

import pytest

from bech32codec.errors import Bech32Error, ErrorKind
from bech32codec.session import Decoder, Encoder
from bech32codec.variants import BECH32, PLAIN_CONSTANT

from helpers.vectors import INVALID_ENCODINGS, VALID_ENCODINGS


def _constant(modified: bool) -> int:
    return BECH32.modified_constant if modified else PLAIN_CONSTANT


def _decode_all(encoding: str, constant: int) -> tuple[str, bytes, bytes, int]:
    decoder = Decoder(encoding, variant=BECH32)
    data = decoder.read()
    nbits_extra = decoder.bits_remaining()
    extra = decoder.read(nbits_extra) if nbits_extra else b""
    decoder.finish(constant)
    return decoder.prefix, data, extra, nbits_extra


class TestRoundTrip:
    @pytest.mark.parametrize("encoding,modified", VALID_ENCODINGS)
    def test_reencodes_to_lowercase(self, encoding, modified):
        constant = _constant(modified)
        prefix, data, extra, nbits_extra = _decode_all(encoding, constant)

        encoder = Encoder(prefix, len(data) * 8, variant=BECH32)
        encoder.write(data)
        if nbits_extra:
            encoder.write(extra, nbits_extra)
        assert encoder.finish(constant) == encoding.lower()

    def test_prefix_keeps_input_case(self):
        decoder = Decoder("A12UEL5L", variant=BECH32)
        assert decoder.prefix == "A"

    def test_empty_payload_has_no_data_bits(self):
        decoder = Decoder("a1lqfn3a", variant=BECH32)
        assert decoder.bits_remaining() == 0
        assert decoder.read() == b""
        assert decoder.finish() == 0

    def test_encoder_grows_past_reservation(self):
        encoder = Encoder("abcdef", variant=BECH32)
        encoder.write(bytes(range(30)))
        encoder.write(b"\x05", 3)
        encoding = encoder.finish(PLAIN_CONSTANT)

        decoder = Decoder(encoding, variant=BECH32)
        assert decoder.read(240) == bytes(range(30))
        assert decoder.read(3) == b"\x05"
        decoder.finish(PLAIN_CONSTANT)

    def test_default_constant_is_modified(self):
        assert Encoder("a", variant=BECH32).finish() == "a1lqfn3a"


class TestInvalid:
    @pytest.mark.parametrize("encoding,modified,reason", INVALID_ENCODINGS)
    def test_rejected(self, encoding, modified, reason):
        with pytest.raises(Bech32Error) as exc_info:
            _decode_all(encoding, _constant(modified))
        assert exc_info.value.kind is ErrorKind[reason]

    def test_mixed_case_rejected_even_with_valid_checksum(self):
        with pytest.raises(Bech32Error) as exc_info:
            Decoder("a12UEL5L", variant=BECH32)
        assert exc_info.value.kind is ErrorKind.MIXED_CASE

    def test_error_is_value_error_with_message(self):
        with pytest.raises(ValueError, match="checksum verification failed"):
            _decode_all("A1LQFN3A", PLAIN_CONSTANT)

    def test_read_more_than_remaining(self):
        decoder = Decoder("abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw", variant=BECH32)
        with pytest.raises(Bech32Error) as exc_info:
            decoder.read(decoder.bits_remaining() + 1)
        assert exc_info.value.kind is ErrorKind.TOO_SHORT

    def test_encoder_rejects_long_prefix(self):
        with pytest.raises(Bech32Error) as exc_info:
            Encoder("a" * 84, variant=BECH32)
        assert exc_info.value.kind is ErrorKind.HRP_TOO_LONG

    def test_encoder_rejects_short_input(self):
        encoder = Encoder("a", variant=BECH32)
        with pytest.raises(Bech32Error) as exc_info:
            encoder.write(b"\x00", 16)
        assert exc_info.value.kind is ErrorKind.BUFFER_INADEQUATE
        assert exc_info.value.kind.is_capacity

    def test_negative_bit_counts_are_typed_errors(self):
        encoder = Encoder("a", variant=BECH32)
        with pytest.raises(Bech32Error) as exc_info:
            encoder.write(b"\x00", -3)
        assert exc_info.value.kind is ErrorKind.BUFFER_INADEQUATE

        decoder = Decoder("abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw", variant=BECH32)
        with pytest.raises(Bech32Error) as exc_info:
            decoder.read(-1)
        assert exc_info.value.kind is ErrorKind.BUFFER_INADEQUATE


class TestSessionLifecycle:
    def test_finished_encoder_refuses_writes(self):
        encoder = Encoder("a", variant=BECH32)
        encoder.finish()
        with pytest.raises(RuntimeError):
            encoder.write(b"\x00")

    def test_failed_encoder_refuses_finish(self):
        encoder = Encoder("a", variant=BECH32)
        with pytest.raises(Bech32Error):
            encoder.write(b"", 8)
        with pytest.raises(RuntimeError):
            encoder.finish()

    def test_unstarted_encoder(self):
        with pytest.raises(RuntimeError):
            Encoder(variant=BECH32).finish()

    def test_encoder_reset_starts_over(self):
        encoder = Encoder("x", variant=BECH32)
        encoder.write(b"\xff")
        encoder.reset("A")
        assert encoder.finish(PLAIN_CONSTANT) == "a12uel5l"

    def test_failed_decoder_refuses_reads(self):
        decoder = Decoder("a1lqfn3a", variant=BECH32)
        with pytest.raises(Bech32Error):
            decoder.finish(PLAIN_CONSTANT)
        with pytest.raises(RuntimeError):
            decoder.read()

    def test_decoder_reset(self):
        decoder = Decoder(variant=BECH32)
        decoder.reset("?1ezyfcl")
        assert decoder.prefix == "?"
        assert decoder.finish(PLAIN_CONSTANT) == 0
