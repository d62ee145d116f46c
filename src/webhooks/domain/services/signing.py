"""
Hub signature primitives.

The signing party computes its HMAC over an ASCII-escaped JSON serialization,
so the body text is escaped the same way before hashing: every character above
U+007F becomes ``\\uXXXX`` (lowercase hex) and characters outside the BMP are
written as their UTF-16 surrogate pair, exactly as ``json.dumps`` does with
``ensure_ascii=True``.
"""
from __future__ import annotations

import hashlib
import hmac
import re

SIGNATURE_ALGORITHM = "sha1"

_HEX_RE = re.compile(r"\A[0-9a-fA-F]*\Z")


def _escape_char(ch: str) -> str:
    cp = ord(ch)
    if cp <= 0x7F:
        return ch
    if cp <= 0xFFFF:
        return "\\u%04x" % cp
    cp -= 0x10000
    high = 0xD800 | (cp >> 10)
    low = 0xDC00 | (cp & 0x3FF)
    return "\\u%04x\\u%04x" % (high, low)


def escape_non_ascii(text: str) -> str:
    """Replace every non-ASCII character with its ``\\uXXXX`` escape."""
    if text.isascii():
        return text
    return "".join(_escape_char(ch) for ch in text)


def decode_hex(value: str) -> bytes:
    """
    Decode a hex string (either case).

    Raises:
        ValueError: odd length or a character outside [0-9a-fA-F]
    """
    if len(value) % 2:
        raise ValueError(f"hex string has odd length {len(value)}")
    if not _HEX_RE.match(value):
        raise ValueError("hex string contains non-hex characters")
    return bytes.fromhex(value)


def encode_hex(data: bytes) -> str:
    return data.hex()


def compute_signature(secret: str, body_text: str) -> str:
    """
    HMAC-SHA1 of the escaped body, keyed with the UTF-8 secret.

    Returns:
        Lowercase hex digest without separators
    """
    payload = escape_non_ascii(body_text).encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha1).digest()
    return encode_hex(digest)


def signature_header_value(secret: str, body_text: str) -> str:
    """Header value a sender would attach, e.g. ``sha1=5d61...``."""
    return f"{SIGNATURE_ALGORITHM}={compute_signature(secret, body_text)}"
