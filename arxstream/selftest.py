"""
Known-Answer Self Test

Checks the ChaCha20 test vectors of RFC 8439 and a round trip through every
variant. Run with `python -m arxstream.selftest`.
"""

import logging
import secrets

from .cipher_core import StreamCipher, available_variants, get_variant

logger = logging.getLogger(__name__)

RFC8439_KEY = bytes(range(32))

# RFC 8439 section 2.4.2
RFC8439_NONCE = bytes.fromhex('000000000000004a00000000')
RFC8439_PLAINTEXT = (
    b"Ladies and Gentlemen of the class of '99: If I could offer you only one "
    b"tip for the future, sunscreen would be it."
)
RFC8439_CIPHERTEXT = bytes.fromhex(
    '6e2e359a2568f98041ba0728dd0d6981'
    'e97e7aec1d4360c20a27afccfd9fae0b'
    'f91b65c5524733ab8f593dabcd62b357'
    '1639d624e65152ab8f530c359f0861d8'
    '07ca0dbf500d6a6156a38e088a22b65e'
    '52bc514d16ccf806818ce91ab7793736'
    '5af90bbf74a35be6b40b8eedf2785e42'
    '874d'
)

# RFC 8439 appendix A.1, test vectors 1 and 2 (all-zero key and nonce)
ZERO_KEY_KEYSTREAM = bytes.fromhex(
    '76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7'
    'da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586'
    '9f07e7be5551387a98ba977c732d080dcb0f29a048e3656912c6533e32ee7aed'
    '29b721769ce64e43d57133b074d839d531ed1f28510afb45ace10a1f4b794d6f'
)


def test_rfc8439_vectors():
    """Check the RFC 8439 encryption and keystream vectors."""
    cipher = StreamCipher(RFC8439_KEY, RFC8439_NONCE, 'chacha20')
    cipher.seek(64)  # The RFC example starts at block counter 1
    ciphertext = cipher.encrypt(RFC8439_PLAINTEXT)
    assert ciphertext == RFC8439_CIPHERTEXT, "RFC 8439 section 2.4.2 vector mismatch"

    for name, nonce_size in (('chacha20', 12), ('chacha20-djb', 8)):
        cipher = StreamCipher(bytes(32), bytes(nonce_size), name)
        stream = cipher.encrypt(bytes(len(ZERO_KEY_KEYSTREAM)))
        assert stream == ZERO_KEY_KEYSTREAM, f"{name} zero key keystream mismatch"

    print("RFC 8439 vectors passed!")


def test_round_trip():
    """Encrypt and decrypt a random message with every variant."""
    message = secrets.token_bytes(1000)
    for name in available_variants():
        policy = get_variant(name)
        key = secrets.token_bytes(policy.key_size)
        nonce = secrets.token_bytes(policy.nonce_size)

        ciphertext = StreamCipher(key, nonce, policy).encrypt(message)
        assert ciphertext != message, f"{name} left the message unchanged"
        assert StreamCipher(key, nonce, policy).decrypt(ciphertext) == message, \
            f"{name} round trip failed"
        logger.info("%s round trip passed", name)

    print("Round trip tests passed!")


def run_selftest():
    """Run all self checks; raises AssertionError on the first failure."""
    test_rfc8439_vectors()
    test_round_trip()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_selftest()
    print("Self test completed successfully!")
