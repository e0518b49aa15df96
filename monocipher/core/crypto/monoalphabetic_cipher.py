"""
Monoalphabetic Substitution Cipher

Purpose:
- Deterministic, key-seeded character substitution for product identifiers
- Length preserving, reversible with the same key
- NOT cryptographic security (non-cryptographic hash + LCG)

Pipeline:
    hash_key -> deterministic_shuffle -> build_tables -> MonoalphabeticCipher

IMPORTANT:
- The arithmetic mirrors the browser-side decoder so that identifiers
  encrypted here decrypt there (and back) with the same key
- Characters outside the alphabet pass through unchanged
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

ALPHANUMERIC = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
)
ALPHANUMERIC_WITH_SLASH = ALPHANUMERIC + "/"

DEFAULT_SAMPLE_TEXT = "Test123abcXYZ"

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN_BIT = 0x80000000


# ---------------------------------------------------------
# Key hashing
# ---------------------------------------------------------

def _utf16_code_units(key: str) -> Iterator[int]:
    """Yield the UTF-16 code units of a string (surrogate pairs split)."""
    data = key.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_key(key: str) -> int:
    """
    Reduce a secret key to a non-negative 32-bit seed.

    Multiply-by-31-and-add rolling hash over the key's UTF-16 code units,
    wrapped to a signed 32-bit integer after every step. The absolute
    value of the final hash is returned, so the result lies in
    ``0 .. 2**31``.

    Args:
        key: Secret key (any string, including empty)

    Returns:
        Seed for the deterministic shuffle (0 for the empty key)
    """
    value = 0
    for code in _utf16_code_units(key):
        value = ((value << 5) - value + code) & _UINT32_MASK
        if value & _INT32_SIGN_BIT:
            value -= 1 << 32
    return abs(value)


# ---------------------------------------------------------
# Seeded pseudo-random stream
# ---------------------------------------------------------

class SeededRandom:
    """
    Linear congruential generator producing floats in [0, 1].

    ``state = (state * 1103515245 + 12345) & 0x7FFFFFFF``

    The product is formed in IEEE-754 double precision before masking,
    which is how the browser-side decoder evaluates it. Once the product
    exceeds 2**53 its low bits are rounded away; an exact-integer product
    would yield a different stream and therefore different tables.
    """

    MULTIPLIER = 1103515245
    INCREMENT = 12345
    MASK = 0x7FFFFFFF

    def __init__(self, seed: int):
        self._state = seed

    @property
    def state(self) -> int:
        return self._state

    def random(self) -> float:
        """Advance the generator and return the next value."""
        product = float(self._state) * self.MULTIPLIER + self.INCREMENT
        self._state = int(product) & self.MASK
        return self._state / self.MASK


def deterministic_shuffle(sequence: Sequence[T], seed: int) -> List[T]:
    """
    Fisher-Yates shuffle driven by a SeededRandom stream.

    The input is left untouched; a new list is returned. Identical seeds
    always give identical orderings.

    Args:
        sequence: Items to permute
        seed: Seed from hash_key

    Returns:
        Permuted copy of the sequence
    """
    items = list(sequence)
    rng = SeededRandom(seed)

    for i in range(len(items) - 1, 0, -1):
        j = math.floor(rng.random() * (i + 1))
        # A draw of exactly 1.0 (state == MASK) gives j == i + 1, which is
        # only past the end on the first step. No seed from hash_key reaches
        # it there; for other seeds, leaving the last item in place gives
        # the same order the browser decoder ends up with.
        if j >= len(items):
            logger.debug("Shuffle draw out of range at index %d, clamped", i)
            j = i
        items[i], items[j] = items[j], items[i]

    return items


# ---------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------

def build_tables(
    alphabet: Sequence[str],
    shuffled: Sequence[str],
) -> Tuple[Mapping[str, str], Mapping[str, str]]:
    """
    Build the forward and inverse substitution tables in one pass.

    ``shuffled`` must be a permutation of ``alphabet``; it is not
    re-validated.

    Returns:
        Tuple of read-only (forward, inverse) mappings
    """
    forward: Dict[str, str] = {}
    inverse: Dict[str, str] = {}

    for plain, substituted in zip(alphabet, shuffled):
        forward[plain] = substituted
        inverse[substituted] = plain

    return MappingProxyType(forward), MappingProxyType(inverse)


# ---------------------------------------------------------
# Cipher
# ---------------------------------------------------------

@dataclass(frozen=True)
class CipherTableInfo:
    """
    Diagnostic snapshot of a cipher's tables.

    Attributes:
        forward_size: Number of entries in the forward table
        inverse_size: Number of entries in the inverse table
        is_complete: Both tables cover the whole alphabet
        sample_mappings: A few forward mappings (a, A, 0 and / if present)
    """
    forward_size: int
    inverse_size: int
    is_complete: bool
    sample_mappings: Dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        return {
            "forwardSize": self.forward_size,
            "inverseSize": self.inverse_size,
            "isComplete": self.is_complete,
            "sampleMappings": dict(self.sample_mappings),
        }


class MonoalphabeticCipher:
    """
    Key-seeded substitution cipher over a fixed alphanumeric alphabet.

    Tables are built once at construction and never modified, so a single
    instance can be shared between threads. Construction and substitution
    do not raise for string input.
    """

    SAMPLE_CHARACTERS = ("a", "A", "0", "/")

    def __init__(self, secret_key: str, include_slash: bool = False):
        self._alphabet = ALPHANUMERIC_WITH_SLASH if include_slash else ALPHANUMERIC

        shuffled = deterministic_shuffle(self._alphabet, hash_key(secret_key))
        self._forward, self._inverse = build_tables(self._alphabet, shuffled)

        logger.debug("Built substitution tables over %d characters", len(self._alphabet))

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def forward_table(self) -> Mapping[str, str]:
        return self._forward

    @property
    def inverse_table(self) -> Mapping[str, str]:
        return self._inverse

    def encrypt(self, text: str) -> str:
        """
        Substitute every alphabet character of ``text``.

        Args:
            text: Plain text (any characters)

        Returns:
            Cipher text of the same length
        """
        forward = self._forward
        return "".join(forward.get(char, char) for char in text)

    def decrypt(self, text: str) -> str:
        """
        Reverse ``encrypt``.

        Args:
            text: Cipher text (any characters)

        Returns:
            Plain text of the same length
        """
        inverse = self._inverse
        return "".join(inverse.get(char, char) for char in text)

    def test_consistency(self, sample_text: str = DEFAULT_SAMPLE_TEXT) -> bool:
        """Check that encrypt followed by decrypt returns ``sample_text``."""
        return self.decrypt(self.encrypt(sample_text)) == sample_text

    def get_table_info(self) -> CipherTableInfo:
        """Report table sizes, completeness and a few sample mappings."""
        size = len(self._alphabet)
        samples = {
            char: self._forward[char]
            for char in self.SAMPLE_CHARACTERS
            if char in self._forward
        }
        return CipherTableInfo(
            forward_size=len(self._forward),
            inverse_size=len(self._inverse),
            is_complete=len(self._forward) == size and len(self._inverse) == size,
            sample_mappings=samples,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonoalphabeticCipher):
            return NotImplemented
        return self._alphabet == other._alphabet and dict(self._forward) == dict(other._forward)

    def __hash__(self) -> int:
        return hash((self._alphabet, tuple(self._forward.values())))

    def __repr__(self) -> str:
        return f"MonoalphabeticCipher(alphabet_size={len(self._alphabet)})"
