"""
Checksum engine: the BCH polymod step and HRP expansion.

Reference: https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki
           https://github.com/bitcoin/bips/blob/master/bip-0350.mediawiki
"""

from __future__ import annotations

from bech32codec.variants import Variant

# Zones of the flag word set by `is_mixed_case`: 'A'..'Z' and 'a'..'z'
_UPPER_ZONE = 0x1FFF00000000
_LOWER_ZONE = 0x1FFF000000000000


def polymod(variant: Variant, chk: int) -> int:
    """Advance the checksum by one symbol position (multiply by x, reduce)."""
    top_shift = variant.checksum_bits - 5
    return (chk & ((1 << top_shift) - 1)) << 5 ^ variant.table[chk >> top_shift]


def polymod_hrp(variant: Variant, chk: int, hrp: str) -> int:
    """
    Fold a human-readable prefix into the checksum.

    The prefix goes in twice: high bits of each character, a zero separator,
    then the low five bits of each character. Uppercase letters are folded to
    lowercase by OR-ing the case bit back into the high part.
    """
    for c in hrp:
        code = ord(c)
        chk = polymod(variant, chk) ^ (code >> 5 | ("A" <= c <= "Z"))
    chk = polymod(variant, chk)
    for c in hrp:
        chk = polymod(variant, chk) ^ (ord(c) & 0x1F)
    return chk


def is_mixed_case(text: str) -> bool:
    """
    Return True if `text` contains both uppercase and lowercase letters.

    Every character sets one bit of a flag word, chosen by its code point;
    letters of each case land in their own zone. Assumes 7-bit input.
    """
    flags = 0
    for c in text:
        flags |= 1 << ((ord(c) - 1) >> 1 & 0x3F)
    return bool(flags & _UPPER_ZONE) and bool(flags & _LOWER_ZONE)
