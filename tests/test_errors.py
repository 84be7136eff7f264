import pytest

from moshcrypt.errors import AuthenticationError, CryptoError, UnsupportedError


def test_str_is_text():
    err = CryptoError("Bad integer.")
    assert str(err) == "Bad integer."
    assert err.text == "Bad integer."


def test_fatal_defaults_to_false():
    assert CryptoError("x").fatal is False


def test_fatal_can_be_set():
    err = CryptoError("Counter wrapped", True)
    assert err.fatal is True
    assert str(err) == "Counter wrapped"


def test_fatal_keyword():
    assert CryptoError("Encrypted 2^47 blocks.", fatal=True).fatal is True


def test_args_hold_text():
    assert CryptoError("abc").args == ("abc",)


@pytest.mark.parametrize("cls", [AuthenticationError, UnsupportedError])
def test_subclasses_caught_as_crypto_error(cls):
    err = cls("Packet failed integrity check.")
    assert isinstance(err, CryptoError)
    assert str(err) == "Packet failed integrity check."
    assert err.text == "Packet failed integrity check."
    assert err.fatal is False


def test_authentication_error_not_unsupported():
    err = AuthenticationError("bad tag")
    assert not isinstance(err, UnsupportedError)
    assert str(err) == "bad tag"
    assert not issubclass(UnsupportedError, AuthenticationError)