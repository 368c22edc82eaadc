import base64
import quopri

import pytest

from ripmail.decoders import (
    QPMode,
    decode_iso,
    decode_multipart,
    decode_qp_iso,
    decode_qp_text,
    decode_quoted_printable,
    decode_short64,
)


@pytest.mark.parametrize(
    "payload",
    [b"", b"H", b"He", b"Hel", b"Hello", b"Hello, world!", bytes(range(1, 200))],
)
def test_short64_round_trip(payload):
    assert decode_short64(base64.b64encode(payload)) == payload


def test_short64_skips_invalid_characters():
    payload = b"some longer text to encode here"
    encoded = base64.b64encode(payload)
    spaced = b"\r\n".join(encoded[i : i + 8] for i in range(0, len(encoded), 8))
    assert decode_short64(spaced) == payload


def test_short64_drops_incomplete_group():
    payload = b"abc"
    encoded = base64.b64encode(payload)
    assert decode_short64(encoded + b"QQ") == payload


def test_short64_fixed_example():
    assert decode_short64(b"SGVsbG8=") == b"Hello"


@pytest.mark.parametrize(
    "payload",
    [b"plain text", b"caf\xc3\xa9 na\xc3\xafve", b"tab\there = equals", b"x" * 200],
)
def test_quoted_printable_round_trip(payload):
    assert decode_qp_text(quopri.encodestring(payload)) == payload


def test_quoted_printable_soft_break_crlf():
    head, tail = b"abc", b"def"
    assert decode_quoted_printable(head + b"=\r\n" + tail) == head + tail


def test_quoted_printable_soft_break_with_trailing_blanks():
    head, tail = b"abc", b"def"
    assert decode_quoted_printable(head + b"=  \t\n" + tail) == head + tail


def test_quoted_printable_invalid_hex_kept():
    text = b"a=ZZb"
    assert decode_quoted_printable(text) == text


def test_quoted_printable_blanks_without_break_kept():
    text = b"a= b"
    assert decode_quoted_printable(text) == text


def test_quoted_printable_trailing_escape_dropped():
    head = b"abc"
    assert decode_quoted_printable(head + b"=") == head


def test_quoted_printable_escape_at_second_last_position_kept():
    text = b"abc=4"
    assert decode_quoted_printable(text) == text


def test_quoted_printable_lowercase_hex():
    assert decode_quoted_printable(b"=c3=a9") == bytes([0xC3, 0xA9])


def test_quoted_printable_iso_mode_underscore():
    assert decode_quoted_printable(b"a_b", QPMode.ISO) == b"a b"
    assert decode_quoted_printable(b"a_b", QPMode.STD) == b"a_b"


def test_qp_iso_keeps_underscores():
    assert decode_qp_iso(b"a_b=41") == b"a_b" + b"A"


def test_qp_text_disabled_returns_input():
    text = b"a=41"
    assert decode_qp_text(text, enabled=False) == text


def test_multipart_percent_escapes():
    assert decode_multipart(b"a%20b") == b"a b"
    assert decode_multipart(b"a=20b") == b"a=20b"


def test_iso_quoted_printable_word():
    payload = "café".encode("utf-8")
    word = b"=?utf-8?Q?" + quopri.encodestring(payload, header=False).strip() + b"?="
    assert decode_iso(word) == payload


def test_iso_base64_adjacent_words_joined():
    first, second = b"Hel", b"lo"
    text = (
        b"=?utf-8?B?" + base64.b64encode(first) + b"?= "
        b"=?utf-8?B?" + base64.b64encode(second) + b"?="
    )
    assert decode_iso(text) == first + second


def test_iso_keeps_prefix_and_suffix():
    prefix, word, suffix = b"Subject: ", b"hi", b" there"
    text = prefix + b"=?utf-8?Q?" + word + b"?=" + suffix
    assert decode_iso(text) == prefix + word + suffix


def test_iso_restores_line_break():
    word = b"hi"
    text = b"=?utf-8?q?" + word + b"\nnext"
    assert decode_iso(text) == word + b"\nnext"


def test_iso_without_encoded_word_unchanged():
    text = b"plain = text ? here"
    assert decode_iso(text) == text


def test_iso_unknown_encoding_unchanged():
    text = b"=?utf-8?X?abc?="
    assert decode_iso(text) == text


def test_iso_size_limits_result():
    word = b"hello"
    result = decode_iso(b"=?utf-8?Q?" + word + b"?=", size=4)
    assert result == word[:3]


def test_iso_rejects_bad_size():
    with pytest.raises(ValueError):
        decode_iso(b"=?utf-8?Q?x?=", size=0)