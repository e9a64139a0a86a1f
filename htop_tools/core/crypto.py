# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
htop-tools Crypto Utilities

Hashing, encoding, random generators and password-based AES.

Encrypted payload wire format::

    <32 hex chars IV>:<hex ciphertext>

The key is derived with scrypt from the caller's password and a fixed,
public salt. Nothing but the payload string is ever stored or sent. The
fixed salt means identical passwords always derive identical keys: this is
an operator convenience tool, not a vault.
"""

import base64
import binascii
import hashlib
import os
import re
import secrets
import urllib.parse
import uuid

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from .exceptions import DecryptionError, InvalidInputError, InvalidPayloadError

PASSWORD_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!@#$%^&*"
)
DEFAULT_PASSWORD_LENGTH = 16
MAX_PASSWORD_LENGTH = 4096

KDF_SALT = b"salt"
KDF_N = 2**14
KDF_R = 8
KDF_P = 1
KEY_LENGTH = 32
IV_LENGTH = 16

# Characters encodeURIComponent leaves alone, besides ASCII alphanumerics
URI_COMPONENT_SAFE = "-_.!~*'()"

_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


# === Hashing ===


def md5_hash(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def sha1_hash(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def sha256_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


# === Encoding ===


def base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def base64_decode(text: str) -> str:
    """
    Decode base64 (standard or URL-safe alphabet, padding optional) to UTF-8.

    Raises:
        InvalidInputError: Not base64, or the bytes are not UTF-8
    """
    cleaned = "".join(text.split()).replace("-", "+").replace("_", "/").rstrip("=")
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        return base64.b64decode(cleaned, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError("Invalid base64 string", field="input", cause=e) from e


def url_encode(text: str) -> str:
    """Percent-encode as a URI component (same unreserved set as encodeURIComponent)"""
    return urllib.parse.quote(text, safe=URI_COMPONENT_SAFE, encoding="utf-8", errors="strict")


def url_decode(text: str) -> str:
    """
    Reverse url_encode. ``+`` is left as is.

    Raises:
        InvalidInputError: A ``%`` not followed by two hex digits, or the
            escaped bytes are not valid UTF-8
    """
    if _PERCENT_RE.search(text):
        raise InvalidInputError("Invalid URL encoded string", field="input")
    try:
        return urllib.parse.unquote(text, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidInputError(
            "Invalid URL encoded string", field="input", cause=e
        ) from e


# === Generators ===


def generate_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    """
    Random password over PASSWORD_ALPHABET.

    Each secure random byte is reduced modulo 70. Since 256 % 70 == 46, the
    first 46 characters are slightly more likely than the rest; this is a
    known property of the output and kept for reproducibility.

    Raises:
        InvalidInputError: Length below 0 or above MAX_PASSWORD_LENGTH
    """
    length = int(length)
    if length < 0:
        raise InvalidInputError(
            f"password length must be non-negative, got {length}", field="length"
        )
    if length > MAX_PASSWORD_LENGTH:
        raise InvalidInputError(
            f"password length must be at most {MAX_PASSWORD_LENGTH}, got {length}",
            field="length",
        )
    data = secrets.token_bytes(length)
    return "".join(PASSWORD_ALPHABET[b % len(PASSWORD_ALPHABET)] for b in data)


def generate_uuid() -> str:
    return str(uuid.uuid4())


# === AES ===


def derive_key(password: str) -> bytes:
    """scrypt(password, fixed salt) -> 32-byte AES-256 key"""
    kdf = Scrypt(salt=KDF_SALT, length=KEY_LENGTH, n=KDF_N, r=KDF_R, p=KDF_P)
    return kdf.derive(password.encode("utf-8"))


def aes_encrypt(text: str, password: str) -> str:
    """Encrypt with AES-256-CBC/PKCS7 under a fresh IV; returns ``ivhex:cipherhex``"""
    key = derive_key(password)
    iv = os.urandom(IV_LENGTH)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(text.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return f"{iv.hex()}:{ciphertext.hex()}"


def parse_payload(payload: str):
    """
    Split a payload on its first colon into (iv, ciphertext) bytes.

    Raises:
        InvalidPayloadError: Missing half, non-hex data or wrong IV size
    """
    iv_hex, _, cipher_hex = payload.strip().partition(":")
    if not iv_hex or not cipher_hex:
        raise InvalidPayloadError("Invalid encrypted format")
    try:
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(cipher_hex)
    except ValueError as e:
        raise InvalidPayloadError("Invalid encrypted format", cause=e) from e
    if len(iv) != IV_LENGTH:
        raise InvalidPayloadError(
            "Invalid encrypted format", details={"iv_bytes": len(iv)}
        )
    return iv, ciphertext


def aes_decrypt(payload: str, password: str) -> str:
    """
    Decrypt an ``ivhex:cipherhex`` payload.

    A wrong password and a corrupted ciphertext fail the same way.

    Raises:
        InvalidPayloadError: Payload is not in wire format
        DecryptionError: Padding, block size or UTF-8 check failed
    """
    iv, ciphertext = parse_payload(payload)
    key = derive_key(password)

    try:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except ValueError as e:
        raise DecryptionError(
            "Decryption failed (wrong password or corrupted data)", cause=e
        ) from e
