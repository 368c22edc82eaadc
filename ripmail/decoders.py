"""Decoders for quoted-printable, short BASE64 and RFC 2047 encoded words.

All functions work on ``bytes``. Malformed input is decoded leniently:
invalid characters are skipped or passed through rather than raising.
"""

from __future__ import annotations

import enum

_B64_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_B64_VALUES = {char: value for value, char in enumerate(_B64_ALPHABET)}
_B64_VALUES[ord("=")] = 0
_PAD = ord("=")

_HEX_VALUES = {char: int(chr(char), 16) for char in b"0123456789abcdefABCDEF"}

_LF = 0x0A
_CR = 0x0D
_SPACE = 0x20
_TAB = 0x09
_UNDERSCORE = ord("_")


class QPMode(enum.IntEnum):
    """Quoted-printable rule set: plain bodies or RFC 2047 words."""

    STD = 0
    ISO = 1


def decode_short64(data: bytes) -> bytes:
    """Decode a short BASE64 string, skipping characters outside the alphabet.

    Every ``=`` seen so far shortens each following 3-byte group by one,
    and an incomplete trailing group is dropped.
    """
    out = bytearray()
    group: list[int] = []
    stop_count = 0
    for char in bytes(data):
        if char == _PAD:
            stop_count += 1
        value = _B64_VALUES.get(char)
        if value is None:
            continue
        group.append(value)
        if len(group) == 4:
            first, second, third, fourth = group
            decoded = (
                ((first << 2) | (second >> 4)) & 0xFF,
                ((second << 4) | (third >> 2)) & 0xFF,
                ((third << 6) | fourth) & 0xFF,
            )
            out.extend(decoded[: max(0, 3 - stop_count)])
            group = []
    return bytes(out)


def decode_quoted_printable(
    data: bytes, mode: QPMode = QPMode.STD, escape: bytes | int = b"="
) -> bytes:
    """Decode quoted-printable ``data`` using ``escape`` as the escape byte.

    Soft line breaks (escape, optional blanks, then CR/LF) are removed,
    invalid hex sequences are kept as they are, and an escape byte at the
    very end ends the output. In ``QPMode.ISO`` underscores become spaces.
    """
    esc = escape if isinstance(escape, int) else bytes(escape)[0]
    line = bytes(data)
    length = len(line)

    def at(index: int) -> int:
        return line[index] if index < length else 0

    out = bytearray()
    ip = 0
    while ip < length:
        char = line[ip]
        if char == esc:
            if ip + 1 >= length:
                break
            original = ip
            while at(ip + 1) in (_TAB, _SPACE):
                ip += 1
            if at(ip + 1) in (_LF, _CR):
                ip += 1
                if ip + 1 < length and at(ip + 1) in (_LF, _CR):
                    ip += 1
                ip += 1
                continue
            ip = original
            high = _HEX_VALUES.get(at(ip + 1))
            low = _HEX_VALUES.get(at(ip + 2))
            if high is not None and low is not None:
                char = high * 16 + low
                ip += 2
        elif char == _UNDERSCORE and mode == QPMode.ISO:
            char = _SPACE
        out.append(char)
        ip += 1
    return bytes(out)


def decode_qp_text(data: bytes, enabled: bool = True) -> bytes:
    """Decode a body line as quoted-printable, or return it unchanged if disabled."""
    if not enabled:
        return bytes(data)
    return decode_quoted_printable(data, QPMode.STD, b"=")


def decode_qp_iso(data: bytes) -> bytes:
    """Decode the quoted-printable text of an encoded word."""
    return decode_quoted_printable(data, QPMode.STD, b"=")


def decode_multipart(data: bytes) -> bytes:
    """Decode ``%XX`` escapes as used in form data."""
    return decode_quoted_printable(data, QPMode.STD, b"%")


def _find(data: bytes, char: bytes, start: int) -> int | None:
    position = data.find(char, start)
    return None if position == -1 else position


def _find_any(data: bytes, chars: bytes, start: int) -> int | None:
    for position in range(start, len(data)):
        if data[position] in chars:
            return position
    return None


def _decode_first_word(data: bytes) -> bytes | None:
    """Decode the first encoded word in ``data``; None if there is none to decode."""
    start = _find(data, b"=?", 0)
    if start is None:
        return None

    charset_end = _find(data, b"?", start + 2)
    if charset_end is None:
        return None
    type_end = _find(data, b"?", charset_end + 1)
    if type_end is None:
        return None
    if _find_any(data, b"?\n\r\t;", type_end + 1) is None:
        return None

    encoding_type = data[charset_end + 1 : charset_end + 2]
    text_start = type_end + 1
    token_end = _find_any(data, b"?;\n\r", text_start)
    restore = b""
    if token_end is not None and data[token_end] not in b"?;":
        restore = data[token_end : token_end + 1]
    encoded = data[text_start:token_end] if token_end is not None else data[text_start:]

    if encoding_type in (b"Q", b"q"):
        decoded = decode_qp_iso(encoded)
    elif encoding_type in (b"B", b"b"):
        decoded = decode_short64(encoded)
    else:
        return None
    decoded = decoded.split(b"\0", 1)[0]

    if token_end is None:
        rest = b""
    else:
        rest_start = token_end + 1
        while rest_start < len(data) and data[rest_start] in b"?=":
            rest_start += 1
        next_start = rest_start
        while next_start < len(data) and data[next_start] in b" \t":
            next_start += 1
        if data.startswith(b"=?", next_start):
            rest_start = next_start
        rest = data[rest_start:]

    return data[:start] + decoded + restore + rest


def decode_iso(data: bytes, size: int | None = None) -> bytes:
    """Decode every RFC 2047 encoded word (``=?charset?Q|B?text?=``) in ``data``.

    Blanks between adjacent encoded words are dropped. When ``size`` is
    given, the result is kept within ``size - 1`` bytes as it would be in
    a buffer of that size.
    """
    if size is not None and size < 1:
        raise ValueError("size must be at least 1")
    text = bytes(data)
    while True:
        decoded = _decode_first_word(text)
        if decoded is None:
            return text
        text = decoded if size is None else decoded[: size - 1]