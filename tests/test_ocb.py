import pytest

from moshcrypt.errors import AuthenticationError, CryptoError, UnsupportedError
from moshcrypt.ocb import OCB

RFC_KEY = bytes(range(16))
ZERO_NONCE = bytes(12)


def test_rfc_vector_empty():
    ocb = OCB(RFC_KEY, 12, 16)
    nonce = bytes.fromhex("BBAA99887766554433221100")
    assert ocb.encrypt(nonce, b"", b"") == bytes.fromhex("785407BFFFC8AD9EDCC5520AC9111EE6")


def test_rfc_vector_short_message():
    ocb = OCB(RFC_KEY, 12, 16)
    nonce = bytes.fromhex("BBAA99887766554433221101")
    data = bytes(range(8))
    expected = bytes.fromhex("6820B3657B6F615A5725BDA0D3B4EB3A257C9AF1F8F03009")
    assert ocb.encrypt(nonce, data, data) == expected
    assert ocb.decrypt(nonce, expected, data) == data


def test_validation_vectors():
    ocb = OCB(bytes(16), 12, 16)
    pt = bytes(128)
    collected = bytearray()
    for i in range(128):
        nonce = bytes(11) + bytes([i])
        collected += ocb.encrypt(nonce, pt[:i], pt[:i])
        collected += ocb.encrypt(nonce, pt[:i], b"")
        collected += ocb.encrypt(nonce, b"", pt[:i])
    tag = ocb.encrypt(ZERO_NONCE, b"", bytes(collected))
    assert tag == bytes.fromhex("B2B41CBF9B05037DA7F16C24A35C1C94")


@pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 31, 32, 33, 64, 100, 127, 300])
def test_round_trip_lengths(length):
    ocb = OCB(RFC_KEY)
    nonce = bytes(11) + bytes([length % 256])
    data = bytes((n * 7) % 256 for n in range(length))
    ad = bytes(range(length % 40))
    ciphertext = ocb.encrypt(nonce, data, ad)
    assert len(ciphertext) == length + 16
    assert ocb.decrypt(nonce, ciphertext, ad) == data


def test_sticky_associated_data():
    ocb = OCB(bytes(16))
    nonce = bytes(11) + b"\x05"
    ad = b"header bytes for the message"
    first = ocb.encrypt(nonce, b"payload", ad)
    second = ocb.encrypt(nonce, b"payload", None)
    assert first == second
    assert ocb.decrypt(nonce, second, None) == b"payload"


def test_tampered_ciphertext_rejected():
    ocb = OCB(RFC_KEY)
    ciphertext = bytearray(ocb.encrypt(ZERO_NONCE, b"some plaintext here", b""))
    ciphertext[3] ^= 0x01
    with pytest.raises(AuthenticationError):
        ocb.decrypt(ZERO_NONCE, bytes(ciphertext), b"")


def test_tampered_tag_rejected():
    ocb = OCB(RFC_KEY)
    ciphertext = bytearray(ocb.encrypt(ZERO_NONCE, b"abc", b""))
    ciphertext[-1] ^= 0x80
    with pytest.raises(AuthenticationError):
        ocb.decrypt(ZERO_NONCE, bytes(ciphertext), b"")


def test_wrong_associated_data_rejected():
    ocb = OCB(RFC_KEY)
    ciphertext = ocb.encrypt(ZERO_NONCE, b"abc", b"one")
    with pytest.raises(AuthenticationError):
        ocb.decrypt(ZERO_NONCE, ciphertext, b"two")


def test_wrong_nonce_rejected():
    ocb = OCB(RFC_KEY)
    ciphertext = ocb.encrypt(ZERO_NONCE, b"abcdef", b"")
    with pytest.raises(AuthenticationError):
        ocb.decrypt(bytes(11) + b"\x01", ciphertext, b"")


def test_short_ciphertext_rejected():
    ocb = OCB(RFC_KEY)
    with pytest.raises(AuthenticationError):
        ocb.decrypt(ZERO_NONCE, bytes(10), b"")


def test_distinct_nonces_give_distinct_ciphertexts():
    ocb = OCB(RFC_KEY)
    a = ocb.encrypt(ZERO_NONCE, b"same text", b"")
    b = ocb.encrypt(bytes(11) + b"\x40", b"same text", b"")
    assert a[:-16] != b[:-16]
    assert a[-16:] != b[-16:]


def test_unsupported_nonce_length():
    with pytest.raises(UnsupportedError):
        OCB(RFC_KEY, 16, 16)


def test_unsupported_key_length():
    with pytest.raises(UnsupportedError):
        OCB(bytes(8))


def test_nonce_of_wrong_size_rejected():
    ocb = OCB(RFC_KEY)
    with pytest.raises(UnsupportedError):
        ocb.encrypt(bytes(8), b"x", b"")


def test_clear_disables_context():
    ocb = OCB(RFC_KEY)
    ocb.clear()
    with pytest.raises(CryptoError):
        ocb.encrypt(ZERO_NONCE, b"x", b"")


def test_contexts_with_same_key_agree():
    first = OCB(RFC_KEY)
    second = OCB(RFC_KEY)
    ciphertext = first.encrypt(ZERO_NONCE, b"shared message", b"ad")
    assert second.decrypt(ZERO_NONCE, ciphertext, b"ad") == b"shared message"