"""
Tests for vCard line unfolding and value decoding.

Run with: python -m pytest tests/test_vcard_decoding.py -v
"""

import pytest

from services.vcard.decoding import (
    clean_phone_number,
    decode_escaped,
    decode_quoted_printable,
    decode_value,
    detect_charset,
    is_quoted_printable,
    unfold_lines,
)
from services.vcard.exceptions import MalformedCardError


class TestUnfoldLines:
    """Folded and soft-broken lines are joined back together."""

    def test_space_continuation(self):
        lines = unfold_lines("FN:Jane D\n oe\nEMAIL:jane@example.com")
        assert lines == ["FN:Jane Doe", "EMAIL:jane@example.com"]

    def test_tab_continuation(self):
        lines = unfold_lines("NOTE:first\n\tsecond")
        assert lines == ["NOTE:firstsecond"]

    def test_crlf_line_endings(self):
        lines = unfold_lines("FN:Jane\r\nEMAIL:jane@example.com\r\n")
        assert lines == ["FN:Jane", "EMAIL:jane@example.com"]

    def test_quoted_printable_soft_break(self):
        text = "N;CHARSET=UTF-8;ENCODING=QUOTED-PRINTABLE:Mart=C3=\n=ADnez;Jos=C3=A9;;;\nEND:VCARD"
        lines = unfold_lines(text)
        assert lines == ["N;CHARSET=UTF-8;ENCODING=QUOTED-PRINTABLE:Mart=C3=ADnez;Jos=C3=A9;;;", "END:VCARD"]

    def test_soft_break_spanning_several_lines(self):
        text = "FN;ENCODING=QUOTED-PRINTABLE:A=\nB=\nC\nEMAIL:a@b.c"
        assert unfold_lines(text) == ["FN;ENCODING=QUOTED-PRINTABLE:ABC", "EMAIL:a@b.c"]

    def test_trailing_equals_without_quoted_printable_is_not_joined(self):
        text = "PHOTO;ENCODING=b;TYPE=JPEG:AAAA=\nFN:Bob"
        assert unfold_lines(text) == ["PHOTO;ENCODING=b;TYPE=JPEG:AAAA=", "FN:Bob"]

    def test_blank_lines_dropped(self):
        assert unfold_lines("\nFN:Jane\n\n") == ["FN:Jane"]


class TestEscapeDecoding:
    """3.0/4.0 backslash escapes."""

    def test_comma_semicolon_backslash(self):
        assert decode_escaped(r"Doe\, John\; Jr\\") == "Doe, John; Jr\\"

    def test_newline_becomes_space(self):
        assert decode_escaped(r"Line one\nLine two") == "Line one Line two"
        assert decode_escaped(r"Line one\NLine two") == "Line one Line two"

    def test_single_pass(self):
        # An escaped backslash followed by n is not a newline
        assert decode_escaped(r"C:\\new") == r"C:\new"

    def test_unknown_escape_left_alone(self):
        assert decode_escaped(r"a\:b") == r"a\:b"

    def test_surrounding_quotes_stripped_once(self):
        assert decode_escaped('"Jane Doe"') == "Jane Doe"
        assert decode_escaped('""quoted""') == '"quoted"'

    def test_lone_quote_kept(self):
        assert decode_escaped('"') == '"'

    def test_dangling_backslash_raises(self):
        with pytest.raises(MalformedCardError):
            decode_escaped("Broken\\")


class TestQuotedPrintable:
    """2.1 quoted-printable values."""

    def test_two_byte_character(self):
        assert decode_quoted_printable("Ren=C3=A9 Dupont", "utf-8") == "René Dupont"

    def test_three_byte_character_decoded_as_one(self):
        assert decode_quoted_printable("=E2=82=AC", "utf-8") == "€"

    def test_lowercase_hex(self):
        assert decode_quoted_printable("Ren=c3=a9", "utf-8") == "René"

    def test_latin1_charset(self):
        assert decode_quoted_printable("Fran=E7ois", "iso-8859-1") == "François"

    def test_invalid_utf8_falls_back_to_latin1(self):
        assert decode_quoted_printable("Bad=FF=FEName", "utf-8") == "Bad\xff\xfeName"

    def test_unknown_charset_falls_back_to_latin1(self):
        assert decode_quoted_printable("Fran=E7ois", "x-no-such-charset") == "François"

    def test_text_outside_escapes_untouched(self):
        assert decode_quoted_printable("plain = text", "utf-8") == "plain = text"


class TestParameters:

    def test_detect_charset(self):
        assert detect_charset("FN;CHARSET=ISO-8859-1;ENCODING=QUOTED-PRINTABLE") == "iso-8859-1"
        assert detect_charset("FN;charset=\"Windows-1252\"") == "windows-1252"

    def test_detect_charset_default(self):
        assert detect_charset("FN;ENCODING=QUOTED-PRINTABLE") == "utf-8"

    def test_quoted_printable_marker_is_case_insensitive(self):
        assert is_quoted_printable("FN;encoding=quoted-printable")
        assert is_quoted_printable("FN;QUOTED-PRINTABLE")
        assert not is_quoted_printable("FN;CHARSET=UTF-8")

    def test_decode_value_selects_decoder(self):
        assert decode_value("Ren=C3=A9", "FN;ENCODING=QUOTED-PRINTABLE") == "René"
        assert decode_value("Ren=C3=A9", "FN") == "Ren=C3=A9"
        assert decode_value(r"Doe\, Jane", "FN") == "Doe, Jane"


class TestCleanPhoneNumber:

    def test_strips_punctuation(self):
        assert clean_phone_number("+1 (555) 010-0.1[2]") == "+1555010012"

    def test_strips_tel_scheme(self):
        assert clean_phone_number("tel:+1-555-555-0199") == "+15555550199"
        assert clean_phone_number("TEL:5550199") == "5550199"

    def test_nothing_left(self):
        assert clean_phone_number("( ) -") is None
