import pytest

from arxstream import (
    CipherContext, generate_block, seek, key_setup, nonce_setup,
    ContextStateError, KeystreamExhaustedError, BlockCountError,
)
from arxstream.cipher_core import keystream_batches

from conftest import make_context, reference_cipher

RFC8439_KEY = bytes(range(32))
RFC8439_BLOCK_NONCE = bytes.fromhex('000000090000004a00000000')
# RFC 8439 section 2.3.2, block counter 1
RFC8439_BLOCK = bytes.fromhex(
    '10f1e7e4d13b5915500fdd1fa32071c4c7d1f4c733c068030422aa9ac3d46c4e'
    'd2826446079faa0914c2d705d98b02a2b5129cd1de164eb9cbd083e8a2503c4e'
)


def test_rfc8439_block_function():
    context = make_context('chacha20', RFC8439_KEY, RFC8439_BLOCK_NONCE)
    seek(context, 1)
    assert generate_block(context) == RFC8439_BLOCK
    assert context.counter == 2


def test_blocks_match_reference(variant, key, nonce, context):
    reference = reference_cipher(variant, key, nonce)
    for i in range(3):
        assert generate_block(context) == reference.encrypt(bytes(64))
        assert context.counter == i + 1


def test_block_leaves_key_and_nonce_words(context):
    before = context.state.copy()
    generate_block(context)
    changed = [i for i in range(16) if context.state[i] != before[i]]
    assert changed == [context.variant.counter_positions[0]]


def test_consecutive_blocks_differ(context):
    assert generate_block(context) != generate_block(context)


def test_two_word_counter_carries_into_high_word(key):
    context = make_context('chacha20-djb', key, bytes(8))
    reference = reference_cipher('chacha20-djb', key, bytes(8))
    reference.seek((2 ** 32 - 1) * 64)

    seek(context, 2 ** 32 - 1)
    blocks = generate_block(context) + generate_block(context)

    assert blocks == reference.encrypt(bytes(128))
    assert context.counter == 2 ** 32 + 1
    assert int(context.state[12]) == 1
    assert int(context.state[13]) == 1


def test_salsa20_counter_carries(key):
    context = make_context('salsa20', key, bytes(8))
    seek(context, 2 ** 32 - 1)
    generate_block(context)
    assert int(context.state[8]) == 0
    assert int(context.state[9]) == 1


@pytest.mark.parametrize('batch_blocks', [1, 3, 7, 1024])
def test_batch_size_does_not_change_keystream(variant, key, nonce, batch_blocks):
    reference = b''.join(keystream_batches(make_context(variant, key, nonce), 10, batch_blocks=10))
    context = make_context(variant, key, nonce)
    assert b''.join(keystream_batches(context, 10, batch_blocks=batch_blocks)) == reference
    assert context.counter == 10


def test_single_word_counter_exhaustion(key):
    context = make_context('chacha20', key, bytes(12))
    seek(context, 2 ** 32 - 1)

    generate_block(context)

    assert context.exhausted
    assert context.blocks_remaining == 0
    assert int(context.state[12]) == 0
    with pytest.raises(KeystreamExhaustedError):
        generate_block(context)


def test_oversized_request_leaves_counter(key):
    context = make_context('chacha20', key, bytes(12))
    seek(context, 2 ** 32 - 2)
    with pytest.raises(KeystreamExhaustedError):
        keystream_batches(context, 3)
    assert context.counter == 2 ** 32 - 2
    assert not context.exhausted


def test_nonce_setup_clears_exhaustion(key):
    context = make_context('chacha20', key, bytes(12))
    seek(context, 2 ** 32 - 1)
    generate_block(context)
    nonce_setup(context, b'\x01' * 12)
    assert not context.exhausted
    assert len(generate_block(context)) == 64


def test_seek_rejects_out_of_range(context):
    with pytest.raises(KeystreamExhaustedError):
        seek(context, context.variant.max_blocks)
    with pytest.raises(KeystreamExhaustedError):
        seek(context, -1)
    with pytest.raises(BlockCountError):
        seek(context, 1.5)


def test_seek_then_rewind_repeats_block(context):
    first = generate_block(context)
    seek(context, 0)
    assert generate_block(context) == first


def test_generate_requires_setup(key):
    context = CipherContext('chacha20')
    with pytest.raises(ContextStateError):
        generate_block(context)
    key_setup(context, key)
    with pytest.raises(ContextStateError):
        generate_block(context)


def test_negative_batch_request(context):
    with pytest.raises(BlockCountError):
        keystream_batches(context, -1)
