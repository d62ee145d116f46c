import hashlib
import hmac
import json

import pytest

from src.webhooks.domain.services.signing import (
    compute_signature,
    decode_hex,
    encode_hex,
    escape_non_ascii,
    signature_header_value,
)

BS = "\x5c"  # backslash
SECRET = "mysecret12345678"
EMOJI_BODY = '{"text":"hi \N{GRINNING FACE} caf\N{LATIN SMALL LETTER E WITH ACUTE}"}'
EMOJI_BODY_ESCAPED = '{"text":"hi ' + BS + "ud83d" + BS + "ude00 caf" + BS + 'u00e9"}'


def test_ascii_text_is_untouched():
    text = '{"a":1,"b":"plain ~ text\\n"}'
    assert escape_non_ascii(text) == text


def test_bmp_characters_become_lowercase_escapes():
    assert escape_non_ascii("caf\N{LATIN SMALL LETTER E WITH ACUTE}") == "caf" + BS + "u00e9"
    assert escape_non_ascii("\N{EURO SIGN}") == BS + "u20ac"
    assert escape_non_ascii("\x7f\x80") == "\x7f" + BS + "u0080"


def test_astral_characters_become_surrogate_pairs():
    assert escape_non_ascii("\N{GRINNING FACE}") == BS + "ud83d" + BS + "ude00"
    assert escape_non_ascii(EMOJI_BODY) == EMOJI_BODY_ESCAPED


def test_escaping_matches_ascii_json_serialization():
    payload = {"text": "hi \N{GRINNING FACE} caf\N{LATIN SMALL LETTER E WITH ACUTE} \N{CJK UNIFIED IDEOGRAPH-4E2D}"}
    raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    assert escape_non_ascii(raw) == json.dumps(payload, ensure_ascii=True, separators=(",", ":"))


def test_decode_hex_is_case_insensitive():
    assert decode_hex("0aFf") == b"\x0a\xff"
    assert decode_hex("") == b""


@pytest.mark.parametrize("value", ["abc", "zzzz", "ab cd", "0x12", "ab\n"])
def test_decode_hex_rejects_bad_input(value):
    with pytest.raises(ValueError):
        decode_hex(value)


def test_encode_hex_is_lowercase_without_separators():
    assert encode_hex(b"\xde\xad\xbe\xef") == "deadbeef"


def test_golden_signature():
    assert compute_signature(SECRET, '{"a":1}') == "6c40c2b5c749b13c37a569268538f23a4a16e99f"
    assert signature_header_value(SECRET, '{"a":1}') == "sha1=6c40c2b5c749b13c37a569268538f23a4a16e99f"


def test_signature_is_deterministic():
    digests = {compute_signature(SECRET, EMOJI_BODY) for _ in range(5)}
    assert len(digests) == 1


def test_signature_covers_escaped_form_not_raw_utf8():
    expected = hmac.new(SECRET.encode(), EMOJI_BODY_ESCAPED.encode("ascii"), hashlib.sha1).hexdigest()
    raw_utf8 = hmac.new(SECRET.encode(), EMOJI_BODY.encode("utf-8"), hashlib.sha1).hexdigest()

    assert compute_signature(SECRET, EMOJI_BODY) == expected == "f4fb5cedd44afc933f579370bda4d0878b1664f3"
    assert compute_signature(SECRET, EMOJI_BODY) != raw_utf8
