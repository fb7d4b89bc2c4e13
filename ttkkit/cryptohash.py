"""XXTEA encryption of short strings, carried in base64 text."""

from __future__ import annotations

import base64
import itertools
import struct

_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_ALPHABET_SET = frozenset(_ALPHABET)
_DELTA = 0x9E3779B9
_MASK = 0xFFFFFFFF
_KEY_SIZE = 16


class DecryptionError(ValueError):
    """Raised when ciphertext does not decrypt to a valid payload."""


def _as_bytes(value: str | bytes | bytearray) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _c_string(value: str | bytes | bytearray) -> bytes:
    """Return the bytes of *value* up to the first NUL byte."""
    return _as_bytes(value).split(b"\0", 1)[0]


def base64_encode(data: str | bytes | bytearray) -> str:
    """Encode *data* as padded standard base64 text."""
    return base64.b64encode(_as_bytes(data)).decode("ascii")


def base64_decode(text: str | bytes | bytearray) -> bytes:
    """Decode base64 text leniently.

    Decoding stops at the first '=' or at any character outside the
    base64 alphabet; a trailing partial group yields as many whole bytes
    as it carries.
    """
    valid = bytes(itertools.takewhile(_ALPHABET_SET.__contains__, _as_bytes(text)))
    if len(valid) % 4 == 1:
        valid = valid[:-1]
    return base64.b64decode(valid + b"=" * (-len(valid) % 4))


def _to_words(data: bytes, include_length: bool) -> list[int]:
    padded = data + b"\0" * (-len(data) % 4)
    words = list(struct.unpack(f"<{len(padded) // 4}I", padded))
    if include_length:
        words.append(len(data) & _MASK)
    return words


def _to_bytes(words: list[int], include_length: bool) -> bytes:
    size = len(words) * 4
    if include_length:
        length = words[-1]
        if length < (size - 7) & _MASK or length > (size - 4) & _MASK:
            raise DecryptionError("ciphertext carries an invalid length trailer")
        size = length
    return struct.pack(f"<{len(words)}I", *words)[:size]


def _key_words(key: str | bytes | bytearray) -> list[int]:
    raw = _as_bytes(key)[:_KEY_SIZE].ljust(_KEY_SIZE, b"\0")
    return list(struct.unpack("<4I", raw))


def _mx(total: int, y: int, z: int, p: int, e: int, key: list[int]) -> int:
    left = ((z >> 5) ^ (y << 2)) + ((y >> 3) ^ (z << 4))
    right = (total ^ y) + (key[(p & 3) ^ e] ^ z)
    return (left ^ right) & _MASK


def _encrypt_words(v: list[int], key: list[int]) -> None:
    n = len(v) - 1
    if n < 1:
        return
    z = v[n]
    total = 0
    for _ in range(6 + 52 // (n + 1)):
        total = (total + _DELTA) & _MASK
        e = (total >> 2) & 3
        for p in range(n):
            y = v[p + 1]
            v[p] = (v[p] + _mx(total, y, z, p, e, key)) & _MASK
            z = v[p]
        y = v[0]
        v[n] = (v[n] + _mx(total, y, z, n, e, key)) & _MASK
        z = v[n]


def _decrypt_words(v: list[int], key: list[int]) -> None:
    n = len(v) - 1
    if n < 1:
        return
    y = v[0]
    total = ((6 + 52 // (n + 1)) * _DELTA) & _MASK
    while total:
        e = (total >> 2) & 3
        for p in range(n, 0, -1):
            z = v[p - 1]
            v[p] = (v[p] - _mx(total, y, z, p, e, key)) & _MASK
            y = v[p]
        z = v[n]
        v[0] = (v[0] - _mx(total, y, z, 0, e, key)) & _MASK
        y = v[0]
        total = (total - _DELTA) & _MASK


def xxtea_encrypt_bytes(data: str | bytes | bytearray, key: str | bytes | bytearray) -> bytes:
    """Encrypt raw bytes with XXTEA; the key is cut or zero-padded to 16 bytes."""
    words = _to_words(_as_bytes(data), include_length=True)
    _encrypt_words(words, _key_words(key))
    return _to_bytes(words, include_length=False)


def xxtea_decrypt_bytes(data: str | bytes | bytearray, key: str | bytes | bytearray) -> bytes:
    """Decrypt raw XXTEA ciphertext made by :func:`xxtea_encrypt_bytes`."""
    raw = _as_bytes(data)
    if not raw:
        raise DecryptionError("ciphertext is empty")
    words = _to_words(raw, include_length=False)
    _decrypt_words(words, _key_words(key))
    return _to_bytes(words, include_length=True)


def xxtea_encrypt(data: str | bytes | bytearray, key: str | bytes | bytearray) -> str:
    """Encrypt text (up to its first NUL) and return the ciphertext as base64."""
    return base64_encode(xxtea_encrypt_bytes(_c_string(data), _c_string(key)))


def xxtea_decrypt(data: str | bytes | bytearray, key: str | bytes | bytearray) -> str:
    """Decrypt base64 ciphertext from :func:`xxtea_encrypt`.

    Empty ciphertext gives an empty string.
    """
    decoded = base64_decode(data)
    if not decoded:
        return ""
    plain = xxtea_decrypt_bytes(decoded, _c_string(key))
    return _c_string(plain).decode("utf-8", errors="replace")


def encrypt(data: str, key: str | bytes) -> str:
    """Encrypt *data* and wrap the base64 ciphertext in a second base64 layer."""
    return base64_encode(xxtea_encrypt(data, key).encode("ascii"))


def decrypt(data: str, key: str | bytes) -> str:
    """Reverse :func:`encrypt`."""
    return xxtea_decrypt(base64_decode(data), key)