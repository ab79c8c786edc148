"""Bech32 / Bech32m and Blech32 / Blech32m codec with SegWit address support."""

from bech32codec.address import decode_address, encode_address
from bech32codec.engine import CHARSET, SEPARATOR, DecoderState, EncoderState, encoded_size
from bech32codec.errors import Bech32Error, ErrorKind
from bech32codec.schemas import WitnessAddress
from bech32codec.session import Decoder, Encoder
from bech32codec.variants import BECH32, BLECH32, PLAIN_CONSTANT, Variant, get_variant

__version__ = "0.1.0"

__all__ = [
    "BECH32",
    "BLECH32",
    "CHARSET",
    "PLAIN_CONSTANT",
    "SEPARATOR",
    "Bech32Error",
    "Decoder",
    "DecoderState",
    "Encoder",
    "EncoderState",
    "ErrorKind",
    "Variant",
    "WitnessAddress",
    "decode_address",
    "encode_address",
    "encoded_size",
    "get_variant",
]
