[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "moshcrypt"
version = "0.1.0"
description = "AES-OCB3 authenticated encryption of datagrams with compact base64 session keys"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["aes", "ocb", "ocb3", "aead", "authenticated-encryption", "nonce", "datagram"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
moshcrypt-encrypt = "moshcrypt.cli:encrypt_main"
moshcrypt-decrypt = "moshcrypt.cli:decrypt_main"

[tool.hatch.build.targets.wheel]
packages = ["moshcrypt"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
