"""
Cipher Core Package

This package implements the stream cipher pipeline: variant policies, the
cipher context, the keystream block generator and the xor stream encryptor.
"""

from .variants import (
    VariantPolicy, SALSA20, CHACHA20, CHACHA20_DJB, BLOCK_SIZE, KEY_SIZE,
    get_variant, available_variants,
)
from .context import CipherContext, scoped_context
from .block_generator import generate_block, keystream_batches, seek
from .stream_cipher import (
    StreamCipher, encrypt_bytes, decrypt_bytes, encrypt_blocks, decrypt_blocks,
    keystream, encrypt, decrypt,
)

__all__ = [
    'VariantPolicy', 'SALSA20', 'CHACHA20', 'CHACHA20_DJB', 'BLOCK_SIZE', 'KEY_SIZE',
    'get_variant', 'available_variants',
    'CipherContext', 'scoped_context',
    'generate_block', 'keystream_batches', 'seek',
    'StreamCipher', 'encrypt_bytes', 'decrypt_bytes', 'encrypt_blocks', 'decrypt_blocks',
    'keystream', 'encrypt', 'decrypt',
]
