from __future__ import annotations

import unittest

import pytest

from webform.datastructures import MultiDict
from webform.encoders import StructuredMap, TextMap, encode_urlencoded, url_encode
from webform.multipart import parse_urlencoded

SAMPLE = [
    ("unicode", "╤╳"),
    ("numbers", "123456789"),
    ("spaces", "1 2 3 4 a b c d"),
    ("slashes", "1/2/3/4/5"),
    ("equals", "1=2=3=4=5=6=7"),
    ("complex", "╤╳/=$$\"'1!2()'\""),
    ("╤╳", "1"),
]

URL_ENCODED = (
    "unicode=%E2%95%A4%E2%95%B3&numbers=123456789&spaces=1%202%203%204%20a%20b%20c%20d"
    "&slashes=1%2F2%2F3%2F4%2F5&equals=1%3D2%3D3%3D4%3D5%3D6%3D7"
    "&complex=%E2%95%A4%E2%95%B3%2F%3D%24%24%22%271%212%28%29%27%22&%E2%95%A4%E2%95%B3=1"
)
FORM_ENCODED = URL_ENCODED.replace("1%202%203%204%20a%20b%20c%20d", "1+2+3+4+a+b+c+d")


class TestEncoders(unittest.TestCase):
    def test_url_encode(self) -> None:
        self.assertEqual(url_encode(TextMap(SAMPLE)), URL_ENCODED)

    def test_encode_urlencoded(self) -> None:
        self.assertEqual(encode_urlencoded(TextMap(SAMPLE)), FORM_ENCODED)

    def test_separator(self) -> None:
        self.assertEqual(encode_urlencoded(TextMap([("a", "1"), ("b", "2")]), sep=";"), "a=1;b=2")

    def test_unreserved_characters(self) -> None:
        self.assertEqual(url_encode(TextMap({"k": "AZaz09-._~"})), "k=AZaz09-._~")

    def test_empty(self) -> None:
        self.assertEqual(encode_urlencoded(TextMap()), "")
        self.assertEqual(url_encode(TextMap({"": ""})), "=")

    def test_multidict_keeps_duplicates(self) -> None:
        d = MultiDict([("a", "1"), ("b", "2"), ("a", "3")])
        self.assertEqual(encode_urlencoded(TextMap(d)), "a=1&b=2&a=3")

    def test_text_map_stringifies(self) -> None:
        self.assertEqual(encode_urlencoded(TextMap({"n": 5})), "n=5")

    def test_structured_map(self) -> None:
        fields = StructuredMap({"s": "plain text", "n": 12, "b": True, "z": None, "l": [1, "x"], "o": {"k": "v"}})
        self.assertEqual(
            list(fields),
            [("s", "plain text"), ("n", "12"), ("b", "true"), ("z", "null"), ("l", '[1,"x"]'), ("o", '{"k":"v"}')],
        )
        self.assertEqual(
            encode_urlencoded(StructuredMap({"l": [1, 2]})),
            "l=%5B1%2C2%5D",
        )

    def test_repr(self) -> None:
        self.assertEqual(repr(TextMap({"a": "b"})), "TextMap([('a', 'b')])")


@pytest.mark.parametrize("encoder", [encode_urlencoded, url_encode])
def test_roundtrip(encoder) -> None:
    fields = parse_urlencoded(encoder(TextMap(SAMPLE)))
    assert fields.items() == SAMPLE


@pytest.mark.parametrize("value", [{"a": "b"}, [("a", "b")], "a=b", None])
def test_rejects_unwrapped_input(value) -> None:
    with pytest.raises(TypeError):
        encode_urlencoded(value)
