"""
Low-level vCard text handling: line unfolding and value decoding.

vCard 2.1 exports use quoted-printable with soft line breaks and a
per-property CHARSET; 3.0 and 4.0 use backslash escapes and folded
lines. Both styles show up in the same files in practice.
"""

import re
from typing import List, Optional

from .exceptions import MalformedCardError

DEFAULT_CHARSET = 'utf-8'

_LINE_BREAK = re.compile(r'\r\n|\r|\n')
_ESCAPE = re.compile(r'\\([nN,;\\])')
_QP_RUN = re.compile(r'(?:=[0-9A-Fa-f]{2})+')
_CHARSET_PARAM = re.compile(r'CHARSET=([^;:]+)', re.IGNORECASE)
_PHONE_PUNCTUATION = re.compile(r'[\s\-().\[\]]')


def is_quoted_printable(property_part: str) -> bool:
    """Check whether a property's parameters declare quoted-printable encoding."""
    return 'QUOTED-PRINTABLE' in property_part.upper()


def detect_charset(property_part: str) -> str:
    """Return the CHARSET parameter of a property, defaulting to UTF-8."""
    match = _CHARSET_PARAM.search(property_part)
    if not match:
        return DEFAULT_CHARSET
    return match.group(1).strip().strip('"').lower() or DEFAULT_CHARSET


def _has_soft_break(line: str) -> bool:
    colon = line.find(':')
    if colon == -1:
        return False
    return line.endswith('=') and is_quoted_printable(line[:colon])


def unfold_lines(text: str) -> List[str]:
    """
    Join physical lines into logical property lines.

    A line starting with a space or tab continues the previous line, minus
    that first character. A quoted-printable line ending in '=' is a soft
    break: the '=' is dropped and the next physical line is appended as is.
    """
    unfolded = []
    current = None

    for line in _LINE_BREAK.split(text):
        if current is not None and _has_soft_break(current):
            current = current[:-1] + line
        elif current is not None and line[:1] in (' ', '\t'):
            current += line[1:]
        else:
            if current:
                unfolded.append(current)
            current = line

    if current:
        unfolded.append(current)

    return unfolded


def _unescape(match) -> str:
    char = match.group(1)
    if char in ('n', 'N'):
        return ' '
    return char


def decode_escaped(value: str) -> str:
    """
    Decode a 3.0/4.0 style value.

    Handles \\n, \\, \\; and \\\\ in a single pass and strips one pair of
    surrounding double quotes.

    Raises:
        MalformedCardError: If the value ends in an unterminated escape
    """
    trailing = len(value) - len(value.rstrip('\\'))
    if trailing % 2:
        raise MalformedCardError("Unterminated escape sequence at end of value")

    decoded = _ESCAPE.sub(_unescape, value)

    if len(decoded) >= 2 and decoded.startswith('"') and decoded.endswith('"'):
        decoded = decoded[1:-1]

    return decoded


def decode_quoted_printable(value: str, charset: str = DEFAULT_CHARSET) -> str:
    """
    Decode =XX escapes using charset.

    Each run of consecutive escapes is decoded as one byte string so that
    multi-byte characters survive. A run that is not valid in charset (or an
    unknown charset) comes back as Latin-1 characters instead of failing.
    """
    def decode_run(match):
        raw = bytes.fromhex(match.group(0).replace('=', ''))
        try:
            return raw.decode(charset)
        except (LookupError, UnicodeDecodeError):
            return raw.decode('latin-1')

    return _QP_RUN.sub(decode_run, value)


def decode_value(value: str, property_part: str) -> str:
    """Decode a property value according to the encoding its parameters declare."""
    if is_quoted_printable(property_part):
        return decode_quoted_printable(value, detect_charset(property_part))
    return decode_escaped(value)


def clean_phone_number(phone: str) -> Optional[str]:
    """
    Remove formatting characters from a phone number.

    Keeps + for international format. A leading tel: URI scheme is dropped.
    Country prefixes are not added here.
    """
    cleaned = _PHONE_PUNCTUATION.sub('', phone)

    if cleaned.lower().startswith('tel:'):
        cleaned = cleaned[4:]

    return cleaned or None
