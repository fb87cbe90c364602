import os

import pytest
from Cryptodome.Cipher import ChaCha20, Salsa20

from arxstream import CipherContext, get_variant, key_setup, nonce_setup

VARIANT_NAMES = ['chacha20', 'chacha20-djb', 'salsa20']


def reference_cipher(variant, key, nonce):
    """The pycryptodomex cipher equivalent to `variant`."""
    if get_variant(variant).name == 'salsa20':
        return Salsa20.new(key=key, nonce=nonce)
    return ChaCha20.new(key=key, nonce=nonce)


def make_context(variant, key, nonce):
    context = CipherContext(variant)
    key_setup(context, key)
    nonce_setup(context, nonce)
    return context


@pytest.fixture(params=VARIANT_NAMES)
def variant(request):
    return get_variant(request.param)


@pytest.fixture
def key():
    return os.urandom(32)


@pytest.fixture
def nonce(variant):
    return os.urandom(variant.nonce_size)


@pytest.fixture
def context(variant, key, nonce):
    return make_context(variant, key, nonce)
