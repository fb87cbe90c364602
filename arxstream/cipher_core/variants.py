"""
Cipher Variant Policies

A variant fixes everything that differs between the stream ciphers of the
family: where the constant, key, counter and nonce words sit in the 16-word
state, which quarter round is used and how quarter rounds are grouped into a
double round. The rest of the pipeline is shared.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple, Union

from ..errors import UnknownVariantError
from ..mixing.arx_rounds import (
    QuarterRound, chacha_quarter_round, salsa_quarter_round,
    CHACHA_COLUMNS, CHACHA_DIAGONALS, SALSA_COLUMNS, SALSA_ROWS, DEFAULT_ROUNDS,
)

STATE_WORDS = 16
BLOCK_SIZE = 64  # Keystream bytes per block
KEY_SIZE = 32    # 256-bit key, the only size supported


@dataclass(frozen=True)
class VariantPolicy:
    """Layout and permutation details of one cipher variant."""
    name: str
    quarter_round: QuarterRound
    round_groups: Tuple[Tuple[Tuple[int, int, int, int], ...], ...]
    constant_positions: Tuple[int, ...]
    key_positions: Tuple[int, ...]
    counter_positions: Tuple[int, ...]
    nonce_positions: Tuple[int, ...]
    rounds: int = DEFAULT_ROUNDS

    def __post_init__(self):
        positions = (self.constant_positions + self.key_positions +
                     self.counter_positions + self.nonce_positions)
        if sorted(positions) != list(range(STATE_WORDS)):
            raise ValueError(f"Variant {self.name} does not cover the 16 state words exactly once")
        if len(self.constant_positions) != 4 or len(self.key_positions) != KEY_SIZE // 4:
            raise ValueError(f"Variant {self.name} must use 4 constant and 8 key words")

    @property
    def key_size(self) -> int:
        return 4 * len(self.key_positions)

    @property
    def nonce_size(self) -> int:
        return 4 * len(self.nonce_positions)

    @property
    def counter_bits(self) -> int:
        return 32 * len(self.counter_positions)

    @property
    def max_blocks(self) -> int:
        """Number of distinct blocks before the counter would wrap."""
        return 1 << self.counter_bits

    @property
    def max_message_bytes(self) -> int:
        """Most bytes a single (key, nonce) pair can encrypt."""
        return self.max_blocks * BLOCK_SIZE

    def __repr__(self) -> str:
        return (f"VariantPolicy({self.name!r}, key={self.key_size * 8} bits, "
                f"nonce={self.nonce_size * 8} bits, counter={self.counter_bits} bits)")


SALSA20 = VariantPolicy(
    name='salsa20',
    quarter_round=salsa_quarter_round,
    round_groups=(SALSA_COLUMNS, SALSA_ROWS),
    constant_positions=(0, 5, 10, 15),
    key_positions=(1, 2, 3, 4, 11, 12, 13, 14),
    counter_positions=(8, 9),
    nonce_positions=(6, 7),
)

# 96-bit nonce with a 32-bit counter (RFC 8439 layout)
CHACHA20 = VariantPolicy(
    name='chacha20',
    quarter_round=chacha_quarter_round,
    round_groups=(CHACHA_COLUMNS, CHACHA_DIAGONALS),
    constant_positions=(0, 1, 2, 3),
    key_positions=(4, 5, 6, 7, 8, 9, 10, 11),
    counter_positions=(12,),
    nonce_positions=(13, 14, 15),
)

# 64-bit nonce with a 64-bit counter (original ChaCha layout)
CHACHA20_DJB = VariantPolicy(
    name='chacha20-djb',
    quarter_round=chacha_quarter_round,
    round_groups=(CHACHA_COLUMNS, CHACHA_DIAGONALS),
    constant_positions=(0, 1, 2, 3),
    key_positions=(4, 5, 6, 7, 8, 9, 10, 11),
    counter_positions=(12, 13),
    nonce_positions=(14, 15),
)

VARIANTS: Dict[str, VariantPolicy] = {
    v.name: v for v in (SALSA20, CHACHA20, CHACHA20_DJB)
}


def _normalize(name: str) -> str:
    return name.strip().lower().replace('_', '-')


def get_variant(variant: Union[str, VariantPolicy]) -> VariantPolicy:
    """
    Look up a variant policy.

    Args:
        variant: A VariantPolicy, or a registered name such as 'chacha20',
            'CHACHA20_DJB' or 'salsa20'

    Returns:
        The matching VariantPolicy

    Raises:
        UnknownVariantError: If no variant is registered under the name
    """
    if isinstance(variant, VariantPolicy):
        return variant
    if not isinstance(variant, str):
        raise TypeError(f"Variant must be a name or VariantPolicy, got {type(variant).__name__}")

    policy = VARIANTS.get(_normalize(variant))
    if policy is None:
        raise UnknownVariantError(
            f"Unknown cipher variant {variant!r}; expected one of {sorted(VARIANTS)}")
    return policy


def available_variants() -> Sequence[str]:
    """Return the names of all registered variants."""
    return sorted(VARIANTS)
