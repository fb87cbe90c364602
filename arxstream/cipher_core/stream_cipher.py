"""
Stream Encryption

This module xors keystream against data. encrypt_bytes and encrypt_blocks
work directly on a CipherContext and, like the eSTREAM reference code,
discard whatever is left of the keystream block that covered the final
partial block. StreamCipher keeps that leftover keystream so data can be fed
in arbitrary pieces and still produce the same output as a single call.

Encryption and decryption are the same operation.
"""

from typing import Optional, Union

import numpy as np

from ..config import load_params
from ..errors import BlockCountError, BufferLengthError
from ..key_schedule.state_setup import key_setup, nonce_setup
from .block_generator import generate_block, keystream_batches, seek
from .context import CipherContext, scoped_context
from .variants import BLOCK_SIZE, VariantPolicy

BytesLike = Union[bytes, bytearray, memoryview]


def _as_array(data: BytesLike, what: str) -> np.ndarray:
    if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be a bytes-like object, got {type(data).__name__}")
    if not memoryview(data).nbytes:
        return np.empty(0, dtype=np.uint8)
    return np.frombuffer(data, dtype=np.uint8)


def _blocks_for(length: int) -> int:
    return -(-length // BLOCK_SIZE)


def encrypt_bytes(context: CipherContext,
                  data: BytesLike,
                  out: Optional[Union[bytearray, memoryview]] = None,
                  length: Optional[int] = None) -> BytesLike:
    """
    Xor data with the next keystream bytes of the context.

    The counter advances by ceil(length / 64). A zero length returns at once
    and leaves the context untouched.

    Args:
        context: A CipherContext after key_setup and nonce_setup
        data: The input bytes
        out: Optional writable buffer of the same size as `data` to write into
            (may be `data` itself for in-place processing)
        length: Number of bytes to process from the start of `data`
            (default: all of it)

    Returns:
        `out` when given, otherwise a new bytes object of `length` bytes

    Raises:
        BufferLengthError: If `out` and `data` differ in size, or `length`
            does not fit in `data`
        KeystreamExhaustedError: If the request would wrap the counter
        ContextStateError: If the context is not set up
    """
    src = _as_array(data, "Input")

    if length is None:
        length = src.size
    if isinstance(length, bool) or not isinstance(length, int):
        raise BufferLengthError(f"Length must be an integer, got {length!r}")
    if not 0 <= length <= src.size:
        raise BufferLengthError(f"Length {length} does not fit an input of {src.size} bytes")

    target = None
    if out is not None:
        if memoryview(out).readonly:
            raise TypeError("Output buffer must be writable")
        target = _as_array(out, "Output")
        if target.size != src.size:
            raise BufferLengthError(
                f"Output buffer has {target.size} bytes, input has {src.size}")

    if length == 0:
        return out if out is not None else b''

    batches = keystream_batches(context, _blocks_for(length))
    if target is None:
        target = np.empty(length, dtype=np.uint8)

    offset = 0
    for batch in batches:
        stream = np.frombuffer(batch, dtype=np.uint8)
        n = min(stream.size, length - offset)
        np.bitwise_xor(src[offset:offset + n], stream[:n], out=target[offset:offset + n])
        offset += n

    return out if out is not None else target.tobytes()


def decrypt_bytes(context: CipherContext,
                  data: BytesLike,
                  out: Optional[Union[bytearray, memoryview]] = None,
                  length: Optional[int] = None) -> BytesLike:
    """Decrypt bytes; identical to encrypt_bytes."""
    return encrypt_bytes(context, data, out=out, length=length)


def _block_length(context: CipherContext, blocks: int) -> int:
    if isinstance(blocks, bool) or not isinstance(blocks, int):
        raise BlockCountError(f"Block count must be an integer, got {blocks!r}")
    if blocks < 0:
        raise BlockCountError(f"Block count must be non-negative, got {blocks}")
    if blocks > context.variant.max_blocks:
        raise BlockCountError(
            f"{blocks} blocks exceed the {context.variant.max_message_bytes}-byte "
            f"limit of {context.variant.name}")
    return blocks * BLOCK_SIZE


def encrypt_blocks(context: CipherContext,
                   data: BytesLike,
                   blocks: int,
                   out: Optional[Union[bytearray, memoryview]] = None) -> BytesLike:
    """
    Encrypt whole 64-byte blocks.

    Args:
        context: A set up CipherContext
        data: The input, at least blocks * 64 bytes
        blocks: Number of blocks to process
        out: Optional writable buffer of the same size as `data`

    Returns:
        Same as encrypt_bytes with length = blocks * 64

    Raises:
        BlockCountError: If `blocks` is negative, not an integer, or larger
            than the counter space of the variant
    """
    return encrypt_bytes(context, data, out=out, length=_block_length(context, blocks))


def decrypt_blocks(context: CipherContext,
                   data: BytesLike,
                   blocks: int,
                   out: Optional[Union[bytearray, memoryview]] = None) -> BytesLike:
    """Decrypt whole 64-byte blocks; identical to encrypt_blocks."""
    return encrypt_blocks(context, data, blocks, out=out)


def keystream(context: CipherContext, length: int) -> bytes:
    """
    Return the next `length` raw keystream bytes.

    Args:
        context: A set up CipherContext
        length: Number of bytes

    Returns:
        The keystream bytes
    """
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise BufferLengthError(f"Length must be a non-negative integer, got {length!r}")
    return encrypt_bytes(context, bytes(length))


class StreamCipher:
    """
    Incremental encryptor over one (key, nonce) pair.

    Unused keystream from a partial block is kept for the next call, so
    splitting the input into pieces of any size gives the same result as
    encrypting it in one go.
    """

    def __init__(self,
                 key: bytes,
                 nonce: bytes,
                 variant: Optional[Union[str, VariantPolicy]] = None):
        """
        Set up the cipher.

        Args:
            key: The 32-byte key
            nonce: The nonce (8 bytes for salsa20/chacha20-djb, 12 for chacha20)
            variant: Variant policy or name (default: configured default variant)
        """
        if variant is None:
            variant = load_params()['default_variant']

        self.context = CipherContext(variant)
        key_setup(self.context, key)
        nonce_setup(self.context, nonce)
        self._pending = bytearray()
        self._position = 0

    @property
    def variant(self) -> VariantPolicy:
        return self.context.variant

    @property
    def position(self) -> int:
        """Byte offset of the next keystream byte."""
        return self._position

    def encrypt(self, data: BytesLike) -> bytes:
        """
        Encrypt the next piece of the message.

        Args:
            data: Plaintext bytes

        Returns:
            Ciphertext of the same length
        """
        src = _as_array(data, "Input")
        n = src.size

        take = min(len(self._pending), n)
        missing = n - take
        # Validated before any buffered keystream is consumed
        batches = keystream_batches(self.context, _blocks_for(missing)) if missing else ()

        stream = bytes(self._pending[:take])
        del self._pending[:take]
        if missing:
            fresh = b''.join(batches)
            stream += fresh[:missing]
            self._pending = bytearray(fresh[missing:])

        self._position += n
        return np.bitwise_xor(src, _as_array(stream, "Keystream")).tobytes()

    def decrypt(self, data: BytesLike) -> bytes:
        """Decrypt the next piece of the message; identical to encrypt."""
        return self.encrypt(data)

    def seek(self, position: int) -> None:
        """
        Move to an absolute byte offset in the keystream.

        Args:
            position: Byte offset, 0 <= position < counter space * 64
        """
        if isinstance(position, bool) or not isinstance(position, int) or position < 0:
            raise BlockCountError(f"Position must be a non-negative integer, got {position!r}")

        block_index, offset = divmod(position, BLOCK_SIZE)
        seek(self.context, block_index)
        self._pending = bytearray()
        if offset:
            self._pending = bytearray(generate_block(self.context)[offset:])
        self._position = position

    def wipe(self) -> None:
        """Zero the cipher state and any buffered keystream."""
        self._pending[:] = bytes(len(self._pending))
        self._pending.clear()
        self.context.wipe()

    def __enter__(self) -> 'StreamCipher':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.wipe()


def encrypt(data: BytesLike,
            key: bytes,
            nonce: bytes,
            variant: Optional[Union[str, VariantPolicy]] = None) -> bytes:
    """
    Convenience function to encrypt a whole message.

    Args:
        data: The plaintext
        key: The 32-byte key
        nonce: The nonce
        variant: Variant policy or name (default: configured default variant)

    Returns:
        The ciphertext
    """
    with scoped_context(key, nonce, variant) as context:
        return bytes(encrypt_bytes(context, data))


def decrypt(data: BytesLike,
            key: bytes,
            nonce: bytes,
            variant: Optional[Union[str, VariantPolicy]] = None) -> bytes:
    """
    Convenience function to decrypt a whole message.

    Args:
        data: The ciphertext
        key: The 32-byte key
        nonce: The nonce
        variant: Variant policy or name (default: configured default variant)

    Returns:
        The plaintext
    """
    with scoped_context(key, nonce, variant) as context:
        return bytes(decrypt_bytes(context, data))
