from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .datastructures import Headers
from .exceptions import LimitExceededError, MultipartParseError, ParseError

if TYPE_CHECKING:  # pragma: no cover
    from typing import Protocol

    class SupportsRead(Protocol):
        def read(self, __n: int) -> bytes: ...

    class SupportsWrite(Protocol):
        def write(self, __b: bytes) -> object: ...


logger = logging.getLogger(__name__)

CRLF = b"\r\n"
SPACE_OR_TAB = (b" "[0], b"\t"[0])


class BoundaryReader:
    """
    A forward-only reader over a byte stream that knows how to consume
    multipart bodies: CRLF-terminated lines with a length cap, exact byte
    counts, and runs of data ending in a delimiter.

    Data is pulled from the underlying stream in chunks of `chunk_size` bytes
    and kept in a small internal buffer.  The reader assumes it is the only
    consumer of `stream`.
    """

    def __init__(self, stream: SupportsRead, chunk_size: int = 65536) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be a positive number, not %r" % chunk_size)
        self.stream = stream
        self.chunk_size = chunk_size
        self._buffer = bytearray()
        self._eof = False

        #: The number of bytes consumed from the stream so far.
        self.position = 0

    def _fill(self) -> bool:
        """Reads one more chunk into the buffer; returns False at end of stream."""
        if self._eof:
            return False
        chunk = self.stream.read(self.chunk_size)
        if not chunk:
            self._eof = True
            return False
        self._buffer += chunk
        return True

    def _consume(self, n: int) -> bytes:
        data = bytes(self._buffer[:n])
        del self._buffer[:n]
        self.position += n
        return data

    def error(self, msg: str, cls: type[ParseError] = MultipartParseError) -> ParseError:
        """Builds a parse error located at the current stream position."""
        logger.warning(msg)
        e = cls(msg)
        e.offset = self.position
        return e

    def read_line(self, max_length: int) -> bytes:
        """
        Reads up to the next CRLF and returns the line without its terminator.

        Raises :class:`LimitExceededError` as soon as it is clear the line is
        longer than `max_length` bytes, so an endless line never grows the
        buffer beyond that.
        """
        start = 0
        while True:
            idx = self._buffer.find(CRLF, start)
            if idx >= 0:
                if idx > max_length:
                    break
                line = self._consume(idx)
                self._consume(len(CRLF))
                return line

            # Without a CRLF in sight, only the final byte may still turn out
            # to be the start of one.
            if len(self._buffer) > max_length + 1:
                break
            start = max(len(self._buffer) - 1, 0)
            if not self._fill():
                raise self.error("Reached end of stream while reading a line")

        raise self.error("Line is longer than %d bytes" % (max_length,), LimitExceededError)

    def read_exact(self, n: int) -> bytes:
        """Reads exactly `n` bytes, failing if the stream ends first."""
        while len(self._buffer) < n:
            if not self._fill():
                raise self.error("Reached end of stream, expected %d more bytes" % (n - len(self._buffer),))
        return self._consume(n)

    def copy_exact(self, sink: SupportsWrite, n: int) -> int:
        """Copies exactly `n` bytes to `sink`, failing if the stream ends first."""
        remaining = n
        while remaining > 0:
            if not self._buffer and not self._fill():
                raise self.error("Reached end of stream, expected %d more bytes" % (remaining,))
            data = self._consume(min(remaining, len(self._buffer)))
            sink.write(data)
            remaining -= len(data)
        return n

    def copy_until(self, sink: SupportsWrite, delimiter: bytes) -> int:
        """
        Copies everything up to `delimiter` into `sink` and consumes the
        delimiter itself, which is not written.

        This is a sliding-window search: whatever cannot be the beginning of
        the delimiter is written out before the next chunk is read, so the
        buffer never holds more than ``len(delimiter) - 1`` unmatched bytes
        plus one chunk.  Returns the number of bytes written.
        """
        keep = len(delimiter) - 1
        written = 0
        while True:
            idx = self._buffer.find(delimiter)
            if idx >= 0:
                if idx > 0:
                    sink.write(self._consume(idx))
                    written += idx
                self._consume(len(delimiter))
                return written

            if len(self._buffer) > keep:
                n = len(self._buffer) - keep
                sink.write(self._consume(n))
                written += n
            if not self._fill():
                raise self.error("Reached end of stream before finding the boundary %r" % (delimiter,))

    def skip_bytes(self, expected: bytes) -> bool:
        """
        Consumes ``len(expected)`` bytes and returns whether they were equal to
        `expected`.  Returns False, without consuming anything, if the stream
        ends before that many bytes are available.
        """
        while len(self._buffer) < len(expected):
            if not self._fill():
                return False
        return self._consume(len(expected)) == expected

    def drain(self) -> int:
        """Reads and discards everything left in the stream."""
        discarded = len(self._buffer)
        self._consume(discarded)
        while self._fill():
            n = len(self._buffer)
            self._consume(n)
            discarded += n
        return discarded

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(position={self.position!r})"


def read_headers(reader: BoundaryReader, max_line_length: int, charset: str = "utf-8") -> Headers:
    """
    Reads a block of ``Name: value`` header lines terminated by an empty line.

    A line starting with a space or a tab continues the value of the previous
    header.  Every line is subject to `max_line_length`.
    """
    headers: list[list[str]] = []

    while True:
        line = reader.read_line(max_line_length)
        if not line:
            break

        if line[0] in SPACE_OR_TAB:
            if not headers:
                raise reader.error("Found a continuation line before the first header")
            headers[-1][1] += " " + line.strip().decode(charset, errors="replace")
            continue

        name, sep, value = line.partition(b":")
        name = name.strip()
        if not sep or not name:
            raise reader.error("Malformed header line %r" % (line,))

        headers.append([name.decode(charset, errors="replace"), value.strip().decode(charset, errors="replace")])

    return Headers((h[0], h[1]) for h in headers)
