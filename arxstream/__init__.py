"""
ARXStream - Salsa20 and ChaCha20 Stream Ciphers

This library implements the Salsa20/ChaCha20 family of add-rotate-xor
stream ciphers behind one shared pipeline: a 16-word state, a 20-round
mixing network, a counter-mode keystream generator and an xor encryptor.

Key Features:
- Salsa20 (64-bit nonce), ChaCha20 (96-bit nonce, RFC 8439) and the
  original ChaCha20 layout (64-bit nonce)
- Vectorized keystream generation with numpy
- Counter overflow detection instead of silent keystream reuse
- Scoped contexts that zero the cipher state on exit

These ciphers provide confidentiality only; there is no authentication.
"""

from .errors import (
    ARXStreamError, KeySizeError, NonceSizeError, UnsupportedSizeError, BufferLengthError,
    BlockCountError, KeystreamExhaustedError, ContextStateError, UnknownVariantError,
)
from .key_schedule import init, key_setup, nonce_setup
from .cipher_core import (
    VariantPolicy, SALSA20, CHACHA20, CHACHA20_DJB, BLOCK_SIZE, KEY_SIZE,
    get_variant, available_variants, CipherContext, scoped_context,
    generate_block, seek, StreamCipher, encrypt_bytes, decrypt_bytes,
    encrypt_blocks, decrypt_blocks, keystream, encrypt, decrypt,
)

__version__ = '0.1.0'
__author__ = 'ARXStream Team'
