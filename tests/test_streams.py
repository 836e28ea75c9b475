from __future__ import annotations

import unittest
from io import BytesIO

from webform.datastructures import Headers
from webform.exceptions import LimitExceededError, MultipartParseError
from webform.streams import BoundaryReader, read_headers

from .compat import parametrize, parametrize_class


@parametrize_class
class TestBoundaryReader(unittest.TestCase):
    def make(self, data: bytes, chunk_size: int = 65536) -> BoundaryReader:
        return BoundaryReader(BytesIO(data), chunk_size)

    @parametrize("chunk_size", [1, 2, 5, 65536])
    def test_read_line(self, chunk_size: int) -> None:
        r = self.make(b"first\r\nsecond\r\n\r\n", chunk_size)
        self.assertEqual(r.read_line(100), b"first")
        self.assertEqual(r.read_line(100), b"second")
        self.assertEqual(r.read_line(100), b"")
        self.assertEqual(r.position, 17)

    def test_read_line_keeps_lone_cr_and_lf(self) -> None:
        r = self.make(b"a\rb\nc\r\n")
        self.assertEqual(r.read_line(100), b"a\rb\nc")

    def test_read_line_at_limit(self) -> None:
        r = self.make(b"12345\r\n")
        self.assertEqual(r.read_line(5), b"12345")

    @parametrize("chunk_size", [1, 3, 65536])
    def test_read_line_too_long(self, chunk_size: int) -> None:
        r = self.make(b"123456\r\n", chunk_size)
        with self.assertRaises(LimitExceededError) as ctx:
            r.read_line(5)
        self.assertGreaterEqual(ctx.exception.offset, 0)

    def test_read_line_eof(self) -> None:
        r = self.make(b"no line end")
        with self.assertRaises(MultipartParseError):
            r.read_line(100)

    def test_read_exact(self) -> None:
        r = self.make(b"abcdef", 2)
        self.assertEqual(r.read_exact(3), b"abc")
        self.assertEqual(r.read_exact(0), b"")
        with self.assertRaises(MultipartParseError):
            r.read_exact(4)

    @parametrize("chunk_size", [1, 4, 65536])
    def test_copy_exact(self, chunk_size: int) -> None:
        sink = BytesIO()
        r = self.make(b"0123456789rest", chunk_size)
        self.assertEqual(r.copy_exact(sink, 10), 10)
        self.assertEqual(sink.getvalue(), b"0123456789")
        self.assertEqual(r.read_exact(4), b"rest")

    def test_copy_exact_short(self) -> None:
        r = self.make(b"0123")
        with self.assertRaises(MultipartParseError):
            r.copy_exact(BytesIO(), 10)

    @parametrize("chunk_size", [1, 2, 3, 7, 65536])
    def test_copy_until(self, chunk_size: int) -> None:
        sink = BytesIO()
        r = self.make(b"data\r\n--bounda\r\n--boundary--", chunk_size)
        self.assertEqual(r.copy_until(sink, b"\r\n--boundary"), 14)
        self.assertEqual(sink.getvalue(), b"data\r\n--bounda")
        self.assertEqual(r.read_exact(2), b"--")

    def test_copy_until_immediate(self) -> None:
        sink = BytesIO()
        r = self.make(b"\r\n--b\r\n")
        self.assertEqual(r.copy_until(sink, b"\r\n--b"), 0)
        self.assertEqual(sink.getvalue(), b"")

    def test_copy_until_missing(self) -> None:
        sink = BytesIO()
        r = self.make(b"no delimiter here", 4)
        with self.assertRaises(MultipartParseError):
            r.copy_until(sink, b"\r\n--b")

    def test_skip_bytes(self) -> None:
        r = self.make(b"\r\n--bX")
        self.assertTrue(r.skip_bytes(b"\r\n--b"))
        self.assertFalse(r.skip_bytes(b"XY"))
        self.assertEqual(r.position, 5)

    def test_skip_bytes_mismatch(self) -> None:
        r = self.make(b"abcdef")
        self.assertFalse(r.skip_bytes(b"abx"))
        self.assertEqual(r.read_exact(3), b"def")

    def test_drain(self) -> None:
        r = self.make(b"ab\r\nepilogue", 3)
        r.read_line(10)
        self.assertEqual(r.drain(), 8)
        self.assertEqual(r.position, 12)
        self.assertEqual(r.drain(), 0)

    def test_invalid_chunk_size(self) -> None:
        with self.assertRaises(ValueError):
            BoundaryReader(BytesIO(), 0)

    def test_repr(self) -> None:
        self.assertEqual(repr(self.make(b"")), "BoundaryReader(position=0)")


class TestReadHeaders(unittest.TestCase):
    def read(self, data: bytes, max_line_length: int = 100) -> Headers:
        return read_headers(BoundaryReader(BytesIO(data)), max_line_length)

    def test_headers(self) -> None:
        h = self.read(b'Content-Disposition: form-data; name="a"\r\nContent-Type:text/plain\r\n\r\n')
        self.assertEqual(h.items(), [("Content-Disposition", 'form-data; name="a"'), ("Content-Type", "text/plain")])
        self.assertEqual(h["content-disposition"], 'form-data; name="a"')

    def test_empty_block(self) -> None:
        self.assertEqual(len(self.read(b"\r\n")), 0)

    def test_continuation(self) -> None:
        h = self.read(b"X-Long: one\r\n two\r\n\tthree\r\n\r\n")
        self.assertEqual(h["x-long"], "one two three")

    def test_continuation_first(self) -> None:
        with self.assertRaises(MultipartParseError):
            self.read(b" orphan\r\n\r\n")

    def test_value_with_colon(self) -> None:
        h = self.read(b"X-Time: 12:30:00\r\n\r\n")
        self.assertEqual(h["X-Time"], "12:30:00")

    def test_repeated_header(self) -> None:
        h = self.read(b"X-A: 1\r\nx-a: 2\r\n\r\n")
        self.assertEqual(h.getall("X-A"), ["1", "2"])

    def test_missing_colon(self) -> None:
        with self.assertRaises(MultipartParseError):
            self.read(b"Not a header\r\n\r\n")

    def test_empty_name(self) -> None:
        with self.assertRaises(MultipartParseError):
            self.read(b": value\r\n\r\n")

    def test_line_too_long(self) -> None:
        with self.assertRaises(LimitExceededError):
            self.read(b"X-Padding: " + b"x" * 200 + b"\r\n\r\n", 64)

    def test_unterminated_block(self) -> None:
        with self.assertRaises(MultipartParseError):
            self.read(b"X-A: 1\r\n")
