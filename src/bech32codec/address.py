"""
Segregated Witness address encoding and decoding.

Version 0 programs are checksummed with the plain constant (Bech32 / Blech32),
all later versions with the modified one (Bech32m / Blech32m).
"""

from __future__ import annotations

import structlog

from bech32codec.engine import DecoderState, EncoderState, encoded_size
from bech32codec.errors import Bech32Error, ErrorKind
from bech32codec.schemas import WitnessAddress
from bech32codec.variants import MAX_WITNESS_VERSION, Variant, resolve_variant

logger = structlog.get_logger()


def _check_program_size(variant: Variant, size: int) -> ErrorKind | None:
    if size < variant.program_min_size:
        return ErrorKind.PROGRAM_TOO_SHORT
    if size > variant.program_max_size:
        return ErrorKind.PROGRAM_TOO_LONG
    return None


def encode_address(
    program: bytes | bytearray,
    hrp: str,
    version: int,
    variant: Variant | None = None,
) -> str:
    """
    Encode a witness program as an address.

    Args:
        program: Witness program bytes.
        hrp: Human-readable prefix (e.g. "bc" for mainnet, "tb" for testnet).
        version: Witness version (0-16).
        variant: Encoding variant; defaults to the configured one.

    Returns:
        The lowercase address string.

    Raises:
        Bech32Error: If the version, program size or prefix is invalid.
    """
    variant = resolve_variant(variant)
    if not 0 <= version <= MAX_WITNESS_VERSION:
        raise Bech32Error(ErrorKind.ILLEGAL_VERSION)
    error = _check_program_size(variant, len(program))
    if error is None and version == 0 and len(program) not in variant.program_v0_sizes:
        error = ErrorKind.PROGRAM_ILLEGAL_SIZE
    if error is not None:
        raise Bech32Error(error)

    size = encoded_size(len(hrp), 5 + len(program) * 8, 0, variant)
    out = bytearray(size or 0)
    state = EncoderState(variant)
    result: str | ErrorKind | None = state.begin(out, hrp)
    if result is None:
        result = state.write(bytes([version]), 5)
    if result is None:
        result = state.write(program, len(program) * 8)
    if result is None:
        result = state.finish(variant.constant_for(version))
    if isinstance(result, ErrorKind):
        if result is ErrorKind.CHECKSUM_FAILURE:
            logger.error("encoder_self_check_failed", variant=variant.name, version=version)
        raise Bech32Error(result)
    logger.debug("address_encoded", variant=variant.name, hrp=hrp.lower(), version=version, program_size=len(program))
    return result


def decode_address(address: str, variant: Variant | None = None) -> WitnessAddress:
    """
    Decode an address into its witness version and program.

    The address may be all-lowercase or all-uppercase.

    Raises:
        Bech32Error: If the address is malformed, its checksum does not match
            the constant its version calls for, or the program is of a size
            the version does not allow.
    """
    variant = resolve_variant(variant)
    try:
        return _decode_address(address, variant)
    except Bech32Error as e:
        logger.debug("address_rejected", variant=variant.name, error=e.kind.value)
        raise


def _decode_address(address: str, variant: Variant) -> WitnessAddress:
    if len(address) < variant.address_min_size:
        raise Bech32Error(ErrorKind.TOO_SHORT)
    state = DecoderState(variant)
    n_hrp = state.begin(address)
    if isinstance(n_hrp, ErrorKind):
        raise Bech32Error(n_hrp)

    n_program = (len(address) - n_hrp - 1 - 1 - variant.checksum_size) * 5 // 8
    error = _check_program_size(variant, n_program)
    if error is not None:
        raise Bech32Error(error)

    version_bits = bytearray(1)
    error = state.read(version_bits, 5)
    if error is not None:
        raise Bech32Error(error)
    version = version_bits[0]
    if version > MAX_WITNESS_VERSION:
        raise Bech32Error(ErrorKind.ILLEGAL_VERSION)
    if version == 0 and n_program not in variant.program_v0_sizes:
        raise Bech32Error(ErrorKind.PROGRAM_ILLEGAL_SIZE)

    program = bytearray(n_program)
    error = state.read(program, n_program * 8)
    if error is not None:
        raise Bech32Error(error)
    n_pad = state.finish(variant.constant_for(version))
    if isinstance(n_pad, ErrorKind):
        raise Bech32Error(n_pad)

    hrp = address[:n_hrp].lower()
    logger.debug("address_decoded", variant=variant.name, hrp=hrp, version=version, program_size=n_program)
    return WitnessAddress(hrp=hrp, version=version, program=bytes(program))
