# moshcrypt

Authenticated encryption for small datagrams using AES-128 in OCB3 mode.
Each message carries an 8-byte sequence number as its nonce. The 128-bit
session key travels as a 22-character base64 string that is easy to copy
between machines.

## Installing

    pip install .

The only runtime dependency is `cryptography`, which supplies the raw AES
block cipher. The OCB3 mode itself is implemented in this package.

Random keys are read from `/dev/urandom`, so a POSIX system is expected.

## Command line

Two commands are installed.

`moshcrypt-encrypt NONCE` reads a message from standard input and encrypts
it under a freshly generated random key with the given decimal nonce. It
writes the sealed packet to standard output and prints `Key: <key>` on
standard error:

    moshcrypt-encrypt 42 < message.txt > message.bin

`moshcrypt-decrypt KEY` reads a sealed packet from standard input and checks
its integrity. It prints `Nonce = <n>` on standard error and writes the
plaintext to standard output:

    moshcrypt-decrypt KEY < message.bin

Each command expects exactly one argument. If the argument count is wrong,
it prints a usage line and exits with status 1. It also exits with status 1,
and prints the reason on standard error, when any of these happens:

- the nonce is not a valid integer;
- the key is malformed;
- the packet is too short;
- the packet fails its integrity check.

A packet holds one datagram, so the plaintext may be at most 2032 bytes.
Larger input makes `Session.encrypt` raise `ValueError`.

## Library use

### Sessions

A `moshcrypt.session.Session` pairs a `Base64Key` with an OCB context:

```python
from moshcrypt.session import Base64Key, Message, Nonce, Session

key = Base64Key()                      # random 128-bit key
session = Session(key)

sealed = session.encrypt(Message(Nonce(1), b"hello"))
opened = session.decrypt(sealed)
assert opened.text == b"hello"
assert opened.nonce.val() == 1

shared = key.printable_key()           # 22 base64 characters
same_key = Base64Key(shared)
```

A sealed packet has three parts, in this order:

1. the 8-byte big-endian nonce;
2. the encrypted payload;
3. a 16-byte authentication tag.

`Session.decrypt` raises `moshcrypt.errors.CryptoError` in these cases:

- The packet is shorter than 24 bytes.
- A byte of the packet has been changed. This raises `AuthenticationError`, a subclass of `CryptoError`.

Beyond a payload of 2048 bytes it raises `ValueError`.

A session counts the 16-byte blocks it has encrypted. Once the count reaches
2^47, `Session.encrypt` raises a `CryptoError` whose `fatal` attribute is
true.

### Keys and nonces

`Base64Key(printable_key)` accepts only a 22-character string that encodes
exactly 16 bytes. Any other string raises `CryptoError`.
`Base64Key(prng=...)` draws the key from a given `moshcrypt.prng.PRNG`.

`Nonce(value)` builds the 12-byte OCB nonce from a 64-bit value:

- `Nonce.data()` gives all 12 bytes.
- `Nonce.cc_bytes()` gives the 8 bytes sent on the wire.
- `Nonce.from_bytes()` parses those 8 bytes.

`moshcrypt.session.unique()` hands out 0, 1, 2, … for the life of the
process. If the 64-bit counter would wrap, it raises a fatal `CryptoError`.

`parse_int(text)` parses a signed 64-bit decimal integer and raises
`CryptoError` on anything else.

`moshcrypt.keycodec` has `encode_key` and `decode_key` for converting
between 16 raw bytes and their 24-character base64 form, which ends in `==`.

### Core dumps

`disable_dumping_core()` sets the soft core-dump size limit of the process
to zero. `reenable_dumping_core()` restores the earlier limit. This keeps
key material out of core files. Both use the `resource` module.

### OCB3 directly

The mode is also available on its own, with associated data:

```python
from moshcrypt.ocb import OCB

ocb = OCB(bytes(16), 12, 16)
ciphertext = ocb.encrypt(bytes(12), b"payload", b"header")
plaintext = ocb.decrypt(bytes(12), ciphertext, b"header")
```

If you pass `None` as the associated data, the hash of the previous
message's associated data is reused.

Errors from `OCB`:

- A wrong tag raises `moshcrypt.errors.AuthenticationError`.
- A nonce length other than 12 raises `moshcrypt.errors.UnsupportedError`, and so does a tag length other than 16.
- After `OCB.clear()`, the context refuses further use.

The lower-level pieces are also available:

- `moshcrypt.ocbkey.OCBKey` holds the per-key values.
- `moshcrypt.blocks` holds the 128-bit block operations.

## What it does not do

This package seals and opens individual datagrams. It does not open
sockets, send or receive packets, or manage a connection. Those are left to
the caller.

## Running the tests

    pip install .[test]
    pytest