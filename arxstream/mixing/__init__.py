"""
Mixing Network Package

This package implements the ARX quarter rounds and the double-round
permutation applied to the 16-word cipher state.
"""

from .arx_rounds import (
    rotate_left, chacha_quarter_round, salsa_quarter_round, double_round, permute,
    CHACHA_COLUMNS, CHACHA_DIAGONALS, SALSA_COLUMNS, SALSA_ROWS, MASK32,
)

__all__ = [
    'rotate_left', 'chacha_quarter_round', 'salsa_quarter_round', 'double_round', 'permute',
    'CHACHA_COLUMNS', 'CHACHA_DIAGONALS', 'SALSA_COLUMNS', 'SALSA_ROWS', 'MASK32',
]
