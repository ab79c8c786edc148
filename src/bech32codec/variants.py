"""
Encoding variants.

Bech32 (BIP-173 / BIP-350) and Blech32 (Elements confidential addresses) share
one engine and differ only in the values collected here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

PLAIN_CONSTANT = 1
HRP_MIN_SIZE = 1
MAX_WITNESS_VERSION = 16
BLINDING_KEY_SIZE = 33  # compressed secp256k1 public key


@dataclass(frozen=True)
class Variant:
    """Immutable parameter set for one member of the Bech32 family."""

    name: str
    checksum_size: int
    generators: tuple[int, ...]
    max_size: int
    modified_constant: int
    program_min_size: int
    program_max_size: int
    program_v0_sizes: tuple[int, int]
    table: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        table = []
        for i in range(32):
            value = 0
            for bit, generator in enumerate(self.generators):
                if i >> bit & 1:
                    value ^= generator
            table.append(value)
        object.__setattr__(self, "table", tuple(table))

    @property
    def checksum_bits(self) -> int:
        return self.checksum_size * 5

    @property
    def hrp_max_size(self) -> int:
        return self.max_size - 1 - self.checksum_size

    @property
    def min_size(self) -> int:
        return HRP_MIN_SIZE + 1 + self.checksum_size

    @property
    def address_min_size(self) -> int:
        """Shortest string that could hold an address of this variant."""
        return HRP_MIN_SIZE + 1 + 1 + (self.program_min_size * 8 + 4) // 5 + self.checksum_size

    def constant_for(self, version: int) -> int:
        """Checksum constant for a witness version: plain for v0, modified otherwise."""
        return PLAIN_CONSTANT if version == 0 else self.modified_constant


BECH32 = Variant(
    name="bech32",
    checksum_size=6,
    generators=(0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3),
    max_size=90,
    modified_constant=0x2BC830A3,
    program_min_size=2,
    program_max_size=40,
    program_v0_sizes=(20, 32),
)

BLECH32 = Variant(
    name="blech32",
    checksum_size=12,
    generators=(0x7D52FBA40BD886, 0x5E8DBF1A03950C, 0x1C3A3C74072A18, 0x385D72FA0E5139, 0x7093E5A608865B),
    max_size=1000,
    modified_constant=0x0455972A3350F7A1,
    program_min_size=2 + BLINDING_KEY_SIZE,
    program_max_size=40 + BLINDING_KEY_SIZE,
    program_v0_sizes=(20 + BLINDING_KEY_SIZE, 32 + BLINDING_KEY_SIZE),
)

VARIANTS: dict[str, Variant] = {v.name: v for v in (BECH32, BLECH32)}


def get_variant(name: str) -> Variant:
    """Look up a variant by name ("bech32" or "blech32")."""
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        msg = f"Unknown encoding variant: {name}"
        raise ValueError(msg) from None


def resolve_variant(variant: Variant | None) -> Variant:
    """Return `variant`, or the configured default when it is None."""
    if variant is not None:
        return variant
    from bech32codec.config import get_settings

    return get_variant(get_settings().default_variant)
