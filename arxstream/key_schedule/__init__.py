"""
Key Schedule Package

This package implements the state initializer that loads the constant
signature, the key and the nonce into a cipher context.
"""

from .state_setup import init, key_setup, nonce_setup, bytes_to_words, words_to_bytes, SIGMA

__all__ = ['init', 'key_setup', 'nonce_setup', 'bytes_to_words', 'words_to_bytes', 'SIGMA']
