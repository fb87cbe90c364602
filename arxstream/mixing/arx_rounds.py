"""
ARX Mixing Network

This module implements the add-rotate-xor (ARX) quarter rounds and the
double-round permutation shared by the Salsa20 and ChaCha20 families.

Every function here is pure: words go in, new words come out. The same code
runs on plain Python ints and on numpy uint32 arrays, where each array
element is an independent block, so many keystream blocks can be mixed in
one pass.
"""

from typing import Callable, List, Sequence, Tuple

MASK32 = 0xFFFFFFFF

# Index groups of the 4x4 state matrix, one tuple per quarter round
CHACHA_COLUMNS = ((0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15))
CHACHA_DIAGONALS = ((0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14))

SALSA_COLUMNS = ((0, 4, 8, 12), (5, 9, 13, 1), (10, 14, 2, 6), (15, 3, 7, 11))
SALSA_ROWS = ((0, 1, 2, 3), (5, 6, 7, 4), (10, 11, 8, 9), (15, 12, 13, 14))

DEFAULT_ROUNDS = 20

Words = Tuple[int, int, int, int]
QuarterRound = Callable[..., Tuple]


def rotate_left(value: int, shift: int, size: int = 32) -> int:
    """
    Rotate a value left by the specified number of bits.
    
    Args:
        value: The value to rotate (must already fit in `size` bits)
        shift: The number of bits to rotate by
        size: The bit size of the value
        
    Returns:
        The rotated value
    """
    return ((value << shift) | (value >> (size - shift))) & ((1 << size) - 1)


def chacha_quarter_round(a: int, b: int, c: int, d: int) -> Words:
    """
    Apply one ChaCha quarter round to four 32-bit words.
    
    Args:
        a, b, c, d: The input words
        
    Returns:
        The new (a, b, c, d)
    """
    a = (a + b) & MASK32
    d = rotate_left(d ^ a, 16)
    c = (c + d) & MASK32
    b = rotate_left(b ^ c, 12)
    a = (a + b) & MASK32
    d = rotate_left(d ^ a, 8)
    c = (c + d) & MASK32
    b = rotate_left(b ^ c, 7)
    return a, b, c, d


def salsa_quarter_round(a: int, b: int, c: int, d: int) -> Words:
    """
    Apply one Salsa20 quarter round to four 32-bit words.
    
    Args:
        a, b, c, d: The input words (y0, y1, y2, y3 in the Salsa20 paper)
        
    Returns:
        The new (a, b, c, d)
    """
    b = b ^ rotate_left((a + d) & MASK32, 7)
    c = c ^ rotate_left((b + a) & MASK32, 9)
    d = d ^ rotate_left((c + b) & MASK32, 13)
    a = a ^ rotate_left((d + c) & MASK32, 18)
    return a, b, c, d


def double_round(words: List, quarter_round: QuarterRound,
                 round_groups: Sequence[Sequence[Sequence[int]]]) -> List:
    """
    Apply one double round (e.g. a column pass then a diagonal pass).
    
    Args:
        words: The 16 state words (not modified)
        quarter_round: The quarter-round function of the variant
        round_groups: Two passes of four index quadruples each
        
    Returns:
        A new list with the 16 mixed words
    """
    x = list(words)
    for group in round_groups:
        for a, b, c, d in group:
            x[a], x[b], x[c], x[d] = quarter_round(x[a], x[b], x[c], x[d])
    return x


def permute(words: Sequence, quarter_round: QuarterRound,
            round_groups: Sequence[Sequence[Sequence[int]]],
            rounds: int = DEFAULT_ROUNDS) -> List:
    """
    Run the full mixing network over a working copy of the state.
    
    Args:
        words: The 16 state words (not modified)
        quarter_round: The quarter-round function of the variant
        round_groups: The two alternating passes of a double round
        rounds: Total number of rounds (must be even)
        
    Returns:
        A new list with the 16 permuted words
    """
    if len(words) != 16:
        raise ValueError(f"State must have 16 words, got {len(words)}")
    if rounds <= 0 or rounds % 2:
        raise ValueError(f"Number of rounds must be a positive even number, got {rounds}")

    x = list(words)
    for _ in range(rounds // 2):
        x = double_round(x, quarter_round, round_groups)
    return x
