"""
Cipher State Setup

This module fills the 16-word cipher state: the constant signature and the
256-bit key (key_setup), then the nonce and a zeroed block counter
(nonce_setup). Word positions come from the context's variant policy, so the
same routines serve every variant.
"""

import logging
from typing import Optional

import numpy as np

from ..errors import ContextStateError, KeySizeError, NonceSizeError, UnsupportedSizeError

logger = logging.getLogger(__name__)

# "expand 32-byte k", the signature of the 256-bit key constructions
SIGMA = b'expand 32-byte k'


def bytes_to_words(data: bytes) -> np.ndarray:
    """
    Parse bytes into 32-bit words, little-endian.
    
    Args:
        data: Input bytes (length must be a multiple of 4)
        
    Returns:
        A new uint32 array
    """
    if len(data) % 4:
        raise ValueError(f"Data length must be a multiple of 4, got {len(data)}")
    return np.frombuffer(data, dtype='<u4').astype(np.uint32)


def words_to_bytes(words: np.ndarray) -> bytes:
    """Serialize 32-bit words to bytes, little-endian."""
    return np.asarray(words, dtype=np.uint32).astype('<u4').tobytes()


SIGMA_WORDS = bytes_to_words(SIGMA)


def _as_bytes(value, what: str) -> bytes:
    if isinstance(value, str) or not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be a bytes-like object, got {type(value).__name__}")
    return bytes(value)


def init() -> None:
    """Global setup hook. Nothing needs to be prepared; kept for API symmetry."""
    return None


def key_setup(context, key: bytes, key_bits: int = 256, nonce_bits: Optional[int] = None) -> None:
    """
    Install the constant signature and the key into the context.
    
    Args:
        context: The CipherContext to prime
        key: The 32-byte key
        key_bits: Declared key size in bits (must be 256)
        nonce_bits: Declared nonce size in bits (must match the variant if given)
        
    Raises:
        UnsupportedSizeError: If the declared sizes do not match the variant
        KeySizeError: If the key is not exactly 32 bytes
    """
    policy = context.variant
    key = _as_bytes(key, "Key")

    if key_bits != policy.key_size * 8:
        raise UnsupportedSizeError(
            f"{policy.name} supports only {policy.key_size * 8}-bit keys, got key_bits={key_bits}")
    if nonce_bits is not None and nonce_bits != policy.nonce_size * 8:
        raise UnsupportedSizeError(
            f"{policy.name} supports only {policy.nonce_size * 8}-bit nonces, got nonce_bits={nonce_bits}")
    if len(key) != policy.key_size:
        raise KeySizeError(f"Key must be exactly {policy.key_size} bytes, got {len(key)}")

    context.state[list(policy.constant_positions)] = SIGMA_WORDS
    context.state[list(policy.key_positions)] = bytes_to_words(key)
    context.key_ready = True
    # A new key invalidates any nonce installed before it
    context.nonce_ready = False
    context.exhausted = False

    logger.debug("Key installed for %s context", policy.name)


def nonce_setup(context, nonce: bytes) -> None:
    """
    Install a nonce and reset the block counter to zero.
    
    May be called again on the same context to start an independent keystream
    under the same key.
    
    Args:
        context: A CipherContext that already went through key_setup
        nonce: The nonce (8 bytes for salsa20/chacha20-djb, 12 for chacha20)
        
    Raises:
        ContextStateError: If no key has been installed
        NonceSizeError: If the nonce has the wrong width
    """
    policy = context.variant
    nonce = _as_bytes(nonce, "Nonce")

    if not context.key_ready:
        raise ContextStateError("key_setup must be called before nonce_setup")
    if len(nonce) != policy.nonce_size:
        raise NonceSizeError(f"Nonce must be exactly {policy.nonce_size} bytes, got {len(nonce)}")

    context.state[list(policy.counter_positions)] = 0
    context.state[list(policy.nonce_positions)] = bytes_to_words(nonce)
    context.nonce_ready = True
    context.exhausted = False

    logger.debug("Nonce installed for %s context, counter reset", policy.name)
