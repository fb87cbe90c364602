"""
Cipher Context

The context holds the 16-word cipher state of one keystream: constants, key,
block counter and nonce, laid out as the selected variant dictates. Only the
counter words change while streaming.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Union

import numpy as np

from ..config import load_params
from ..errors import ContextStateError, KeystreamExhaustedError
from ..key_schedule.state_setup import key_setup, nonce_setup
from .variants import STATE_WORDS, VariantPolicy, get_variant

logger = logging.getLogger(__name__)


class CipherContext:
    """
    Fixed-size cipher state for one variant.

    The context is a context manager: leaving a `with` block overwrites the
    state with zeros, whether the block exits normally or with an exception.
    """

    def __init__(self, variant: Union[str, VariantPolicy] = 'chacha20'):
        """
        Allocate an empty context.

        Args:
            variant: Variant policy or registered variant name
        """
        self.variant = get_variant(variant)
        self.state = np.zeros(STATE_WORDS, dtype=np.uint32)
        self.key_ready = False
        self.nonce_ready = False
        # Set once the final block of the counter space has been produced
        self.exhausted = False

    @property
    def counter(self) -> int:
        """Current block counter, low word first."""
        value = 0
        for i, pos in enumerate(self.variant.counter_positions):
            value |= int(self.state[pos]) << (32 * i)
        return value

    def set_counter(self, value: int) -> None:
        """
        Write the block counter words.

        Args:
            value: New counter value, 0 <= value < 2**counter_bits
        """
        if not 0 <= value < self.variant.max_blocks:
            raise KeystreamExhaustedError(
                f"Counter {value} outside the {self.variant.counter_bits}-bit counter range")
        for i, pos in enumerate(self.variant.counter_positions):
            self.state[pos] = (value >> (32 * i)) & 0xFFFFFFFF

    @property
    def blocks_remaining(self) -> int:
        """Blocks that can still be produced before the counter would wrap."""
        if self.exhausted:
            return 0
        return self.variant.max_blocks - self.counter

    def ensure_ready(self) -> None:
        """
        Check that key and nonce have been installed.

        Raises:
            ContextStateError: If key_setup or nonce_setup is missing
        """
        if not self.key_ready:
            raise ContextStateError("key_setup must be called before using the context")
        if not self.nonce_ready:
            raise ContextStateError("nonce_setup must be called before using the context")

    def advance(self, blocks: int) -> None:
        """
        Move the counter forward after `blocks` keystream blocks were produced.

        Args:
            blocks: Number of blocks consumed (must fit in blocks_remaining)
        """
        if blocks > self.blocks_remaining:
            raise KeystreamExhaustedError(
                f"Cannot advance by {blocks} blocks, only {self.blocks_remaining} remain")

        new_counter = self.counter + blocks
        if new_counter == self.variant.max_blocks:
            # The counter words wrap to zero; the flag keeps the next call from reusing block 0
            self.set_counter(0)
            self.exhausted = True
            logger.warning("%s keystream exhausted: counter space fully used for this nonce",
                           self.variant.name)
        else:
            self.set_counter(new_counter)

    def wipe(self) -> None:
        """Overwrite the state with zeros and mark the context as not set up."""
        self.state.fill(0)
        self.key_ready = False
        self.nonce_ready = False
        self.exhausted = False
        logger.debug("Wiped %s context", self.variant.name)

    def __enter__(self) -> 'CipherContext':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.wipe()

    def __repr__(self) -> str:
        # Never include key material
        return (f"CipherContext(variant={self.variant.name!r}, key_ready={self.key_ready}, "
                f"nonce_ready={self.nonce_ready}, counter={self.counter})")


@contextmanager
def scoped_context(key: bytes,
                   nonce: bytes,
                   variant: Optional[Union[str, VariantPolicy]] = None) -> Iterator[CipherContext]:
    """
    Build a fully set up context that is wiped on every exit path.

    Args:
        key: The 32-byte key
        nonce: The nonce (width depends on the variant)
        variant: Variant policy or name (default: configured default variant)

    Yields:
        A CipherContext ready for encryption
    """
    if variant is None:
        variant = load_params()['default_variant']

    context = CipherContext(variant)
    try:
        key_setup(context, key)
        nonce_setup(context, nonce)
        yield context
    finally:
        context.wipe()
