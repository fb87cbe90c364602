"""
Keystream Block Generator

This module turns the cipher state into keystream: the state is copied, run
through the mixing network, added back word-wise to the original (feed-forward)
and serialized little-endian to 64 bytes per block. The live counter is only
advanced after the block has been produced.

Blocks are generated in batches: a (16, n) uint32 matrix holds n copies of
the state that differ only in their counter words, and the quarter rounds mix
all n columns at once.
"""

import logging
from typing import Iterator, Optional

import numpy as np

from ..config import load_params
from ..errors import BlockCountError, KeystreamExhaustedError
from ..mixing.arx_rounds import MASK32, permute
from .context import CipherContext

logger = logging.getLogger(__name__)


def _block_words(context: CipherContext, start_counter: int, blocks: int) -> np.ndarray:
    """
    Compute `blocks` consecutive keystream blocks without touching the context.

    Args:
        context: The set up cipher context
        start_counter: Counter value of the first block
        blocks: Number of blocks to compute

    Returns:
        A (blocks, 16) uint32 array of output words
    """
    policy = context.variant

    # One column per block
    x = np.repeat(context.state.reshape(16, 1), blocks, axis=1)
    counters = np.arange(blocks, dtype=np.uint64) + np.uint64(start_counter)
    for i, pos in enumerate(policy.counter_positions):
        x[pos] = ((counters >> np.uint64(32 * i)) & np.uint64(MASK32)).astype(np.uint32)

    mixed = permute(list(x), policy.quarter_round, policy.round_groups, policy.rounds)

    # Feed-forward; uint32 array addition wraps modulo 2**32
    out = np.stack(mixed) + x
    return out.T


def generate_block(context: CipherContext) -> bytes:
    """
    Produce the next 64-byte keystream block and advance the counter by one.

    Args:
        context: The set up cipher context

    Returns:
        64 bytes of keystream

    Raises:
        ContextStateError: If key or nonce setup is missing
        KeystreamExhaustedError: If the counter space is used up
    """
    context.ensure_ready()
    if context.blocks_remaining < 1:
        raise KeystreamExhaustedError(f"{context.variant.name} keystream exhausted for this nonce")

    block = _block_words(context, context.counter, 1).astype('<u4').tobytes()
    context.advance(1)
    return block


def keystream_batches(context: CipherContext,
                      blocks: int,
                      batch_blocks: Optional[int] = None) -> Iterator[bytes]:
    """
    Return an iterator over keystream for `blocks` blocks, a batch at a time.

    The whole request is checked against the counter space before the first
    batch, so a request that does not fit leaves the context untouched.
    The counter advances as each batch is yielded.

    Args:
        context: The set up cipher context
        blocks: Total number of blocks
        batch_blocks: Blocks per batch (default: configured batch size)

    Returns:
        Iterator of keystream bytes, a multiple of 64 bytes per batch
    """
    if blocks < 0:
        raise BlockCountError(f"Block count must be non-negative, got {blocks}")

    context.ensure_ready()
    if blocks > context.blocks_remaining:
        raise KeystreamExhaustedError(
            f"Request for {blocks} blocks exceeds the {context.blocks_remaining} blocks left "
            f"in the {context.variant.counter_bits}-bit counter space of {context.variant.name}")

    if batch_blocks is None:
        batch_blocks = load_params()['batch_blocks']

    return _iter_batches(context, blocks, batch_blocks)


def _iter_batches(context: CipherContext, blocks: int, batch_blocks: int) -> Iterator[bytes]:
    remaining = blocks
    while remaining > 0:
        n = min(batch_blocks, remaining)
        logger.debug("Generating %d %s blocks from counter %d", n, context.variant.name, context.counter)
        batch = _block_words(context, context.counter, n).astype('<u4').tobytes()
        context.advance(n)
        remaining -= n
        yield batch


def seek(context: CipherContext, block_index: int) -> None:
    """
    Position the counter at an absolute block index.

    Args:
        context: The set up cipher context
        block_index: Index of the next block to produce

    Raises:
        KeystreamExhaustedError: If the index is outside the counter range
    """
    context.ensure_ready()
    if isinstance(block_index, bool) or not isinstance(block_index, int):
        raise BlockCountError(f"Block index must be an integer, got {block_index!r}")
    context.set_counter(block_index)
    context.exhausted = False
    logger.debug("Seeked %s context to block %d", context.variant.name, block_index)

