from __future__ import annotations

import logging
import os
import sys
import tempfile
from email.message import Message
from enum import IntEnum
from io import BytesIO
from typing import TYPE_CHECKING, NamedTuple

from .datastructures import Headers, MultiDict
from .decoders import form_decode
from .exceptions import FileError, MultipartParseError
from .streams import BoundaryReader, read_headers

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable
    from typing import IO, Any, Literal, Protocol, TypeAlias, TypedDict

    class SupportsRead(Protocol):
        def read(self, __n: int) -> bytes: ...

    class QuerystringCallbacks(TypedDict, total=False):
        on_field: Callable[[str, str], None]
        on_end: Callable[[], None]

    class MultipartCallbacks(TypedDict, total=False):
        on_part_begin: Callable[[Headers], None]
        on_field: Callable[[str, str], None]
        on_file: Callable[[str, FilePart], None]
        on_end: Callable[[], None]

    class FormParserConfig(TypedDict):
        MAX_LINE_LENGTH: int
        CHUNK_SIZE: int
        CHARSET: str
        UPLOAD_DIR: str | bytes | None
        UPLOAD_KEEP_EXTENSIONS: bool

    class FileConfig(TypedDict, total=False):
        UPLOAD_DIR: str | bytes | None
        UPLOAD_KEEP_EXTENSIONS: bool

    class FileProtocol(Protocol):
        def __init__(self, file_name: str, field_name: str | None, config: FileConfig) -> None: ...
        def write(self, data: bytes) -> int: ...
        def finalize(self) -> None: ...
        def close(self) -> None: ...
        def delete(self) -> None: ...
        @property
        def actual_file_name(self) -> str: ...
        @property
        def size(self) -> int: ...

    OnFieldCallback = Callable[[str, str], None]
    OnFileCallback = Callable[[str, "FilePart"], None]

    CallbackName: TypeAlias = Literal["part_begin", "field", "file", "end"]


logger = logging.getLogger(__name__)


class MultipartState(IntEnum):
    """Multipart parser states.

    The parser expects the opening boundary line first, then loops over parts
    until it sees the closing boundary.
    """

    EXPECT_PREAMBLE = 0
    EXPECT_PART = 1
    DONE = 2


class DispositionState(IntEnum):
    """States of the Content-Disposition parameter value lexer."""

    BARE_TOKEN = 0
    IN_QUOTES = 1


# RFC 2046, section 5.1.1: a boundary is made of 1 to 70 characters.
MAX_BOUNDARY_LENGTH = 70

CRLF = b"\r\n"
HYPHENS = b"--"
QUOTE = '"'
BACKSLASH = "\\"

# Characters that would make a file name anything but a single path segment.
INVALID_FILENAME_CHARS = frozenset("/\\\x00")


def parse_options_header(value: str | bytes | None) -> tuple[str, dict[str, str]]:
    """Parses a Content-Type header into a value in the following format: (content_type, {parameters})."""
    if not value:
        return ("", {})

    # If we are passed bytes, we assume that it conforms to WSGI, encoding in latin-1.
    if isinstance(value, bytes):  # pragma: no cover
        value = value.decode("latin-1")

    # If we have no options, return the string as-is.
    if ";" not in value:
        return (value.lower().strip(), {})

    # Let the email package deal with quoting and RFC 2231 parameters.
    message = Message()
    message["content-type"] = value
    params = message.get_params()
    # If there were no parameters, this would have already returned above
    assert params, "At least the content type value should be present"
    ctype = params.pop(0)[0].lower().strip()
    options: dict[str, str] = {}
    for key, param in params:
        # If the value returned from get_params() is a 3-tuple, the last
        # element corresponds to the value.
        # See: https://docs.python.org/3/library/email.compat32-message.html
        if isinstance(param, tuple):
            param = param[-1]
        options[key] = param
    return ctype, options


def parse_boundary(content_type: str) -> str:
    """
    Returns the ``boundary`` parameter of a ``multipart/form-data`` content
    type, with one pair of surrounding quotes removed.
    """
    _, options = parse_options_header(content_type)
    boundary = options.get("boundary")
    if not boundary:
        msg = "No boundary given in Content-Type %r" % (content_type,)
        logger.warning(msg)
        raise MultipartParseError(msg)

    if len(boundary) > MAX_BOUNDARY_LENGTH:
        msg = "Boundary is longer than %d characters: %r" % (MAX_BOUNDARY_LENGTH, boundary)
        logger.warning(msg)
        raise MultipartParseError(msg)

    return boundary


def parse_disposition_value(text: str) -> tuple[str, str]:
    """
    Reads one parameter value from the start of `text`, returning the value
    and whatever follows it.

    A value starting with a double quote runs up to the next quote that is not
    preceded by a backslash, and every ``\\"`` in it is turned into ``"``.
    Backslashes in front of any other character are kept.  The closing quote
    stays at the start of the returned rest.  Any other value runs verbatim up
    to the next ``;`` or the end of `text`.
    """
    if not text:
        return "", ""

    state = DispositionState.IN_QUOTES if text[0] == QUOTE else DispositionState.BARE_TOKEN

    if state == DispositionState.BARE_TOKEN:
        pos = text.find(";")
        if pos < 0:
            return text, ""
        return text[:pos], text[pos:]

    chars: list[str] = []
    i = 1
    length = len(text)
    while i < length:
        c = text[i]
        if c == BACKSLASH and i + 1 < length and text[i + 1] == QUOTE:
            chars.append(QUOTE)
            i += 2
            continue
        if c == QUOTE:
            return "".join(chars), text[i:]
        chars.append(c)
        i += 1

    msg = "Unterminated quoted string in Content-Disposition value %r" % (text,)
    logger.warning(msg)
    raise MultipartParseError(msg)


def parse_content_disposition(value: str) -> tuple[str, str | None]:
    """
    Extracts the ``name`` and ``filename`` parameters of a Content-Disposition
    header value.

    The value is scanned left to right: ``filename=`` is only looked for after
    the ``name=`` parameter, so a ``filename`` sent before ``name`` is not
    seen.  Returns ``""`` for a missing name and None for a missing filename.
    """
    name = ""
    pos = value.find("name=")
    if pos >= 0:
        value = value[pos + 5 :]
        name, value = parse_disposition_value(value)

    file_name = None
    pos = value.find("filename=")
    if pos >= 0:
        value = value[pos + 9 :]
        file_name, value = parse_disposition_value(value)

    return name, file_name


def validate_filename(file_name: str) -> str:
    """
    Makes sure an uploaded file name is a single path segment.

    Old versions of Internet Explorer send the full Windows path of the file;
    those are cut down to the last segment.  Anything that still contains a
    path separator or a NUL byte, or is ``.`` or ``..``, is rejected.
    """
    if file_name[1:3] == ":\\" or file_name[:2] == "\\\\":
        file_name = file_name.split("\\")[-1]

    if file_name in ("", ".", "..") or not INVALID_FILENAME_CHARS.isdisjoint(file_name):
        msg = "Invalid file name: %r" % (file_name,)
        logger.warning(msg)
        raise MultipartParseError(msg)

    return file_name


class FilePart:
    """
    A file uploaded in a ``multipart/form-data`` body.

    The content has been spooled to the file at :attr:`temp_path`, which now
    belongs to the caller: nothing in this library removes it.  Call
    :meth:`delete` when done, or use the part as a context manager::

        with form.files["upload"] as part:
            shutil.copy(part.temp_path, destination)
    """

    def __init__(self, field_name: str, filename: str, headers: Headers, temp_path: str, size: int = 0) -> None:
        self.field_name = field_name
        self.filename = filename
        self.headers = headers
        self.temp_path = temp_path
        self.size = size

    @property
    def content_type(self) -> str | None:
        """The Content-Type header sent with this part, if any."""
        return self.headers.get("Content-Type")

    def open(self) -> IO[bytes]:
        return open(self.temp_path, "rb")

    def delete(self) -> None:
        """Removes the spooled file.  Does nothing if it is already gone."""
        try:
            os.remove(self.temp_path)
        except FileNotFoundError:
            return
        logger.debug("Deleted spooled file %r", self.temp_path)

    def __enter__(self) -> FilePart:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.delete()

    def __str__(self) -> str:
        return self.filename

    def __repr__(self) -> str:
        return "{}(field_name={!r}, filename={!r}, temp_path={!r})".format(
            self.__class__.__name__, self.field_name, self.filename, self.temp_path
        )


class File:
    """
    The temporary file a file part is spooled to.  It is created on disk as
    soon as the object is constructed, and is never deleted on close.

    Configuration keys used:

    ``UPLOAD_DIR``
        Directory to create the file in; the system default when None.

    ``UPLOAD_KEEP_EXTENSIONS``
        Whether the temporary file gets the extension of the uploaded one.
    """

    def __init__(self, file_name: str, field_name: str | None = None, config: FileConfig = {}) -> None:
        self.logger = logging.getLogger(__name__)
        self._config = config
        self._bytes_written = 0

        self._field_name = field_name
        self._file_name = file_name
        self._actual_file_name = ""
        self._ext = os.path.splitext(file_name)[1]

        self._fileobj = self._get_disk_file()

    @property
    def field_name(self) -> str | None:
        """The form field associated with this file."""
        return self._field_name

    @property
    def file_name(self) -> str:
        """The file name given in the upload request."""
        return self._file_name

    @property
    def actual_file_name(self) -> str:
        """The path of the temporary file the data is written to."""
        return self._actual_file_name

    @property
    def file_object(self) -> IO[bytes]:
        return self._fileobj

    @property
    def size(self) -> int:
        """The number of bytes written so far."""
        return self._bytes_written

    def _get_disk_file(self) -> IO[bytes]:
        file_dir = self._config.get("UPLOAD_DIR")
        keep_extensions = self._config.get("UPLOAD_KEEP_EXTENSIONS", False)

        suffix = self._ext if keep_extensions and self._ext else None
        if isinstance(file_dir, bytes):
            file_dir = file_dir.decode(sys.getfilesystemencoding())

        options = {"suffix": suffix, "dir": file_dir, "delete": False}
        self.logger.info("Creating a temporary file with options: %r", options)
        try:
            tmp_file = tempfile.NamedTemporaryFile(suffix=suffix, dir=file_dir, delete=False)
        except OSError:
            self.logger.exception("Error creating named temporary file")
            raise FileError("Error creating named temporary file")

        self._actual_file_name = tmp_file.name
        return tmp_file

    def write(self, data: bytes) -> int:
        bwritten = self._fileobj.write(data)
        self._bytes_written += bwritten
        return bwritten

    def finalize(self) -> None:
        self._fileobj.flush()

    def close(self) -> None:
        self._fileobj.close()

    def delete(self) -> None:
        """Closes and removes the temporary file."""
        self.close()
        try:
            os.remove(self._actual_file_name)
        except FileNotFoundError:
            pass

    def __repr__(self) -> str:
        return "{}(file_name={!r}, field_name={!r}, actual_file_name={!r})".format(
            self.__class__.__name__, self.file_name, self.field_name, self.actual_file_name
        )


class BaseParser:
    """
    This class implements some helpful methods for parsers.  Currently, it
    just implements the callback logic in a central location.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)
        self.callbacks: QuerystringCallbacks | MultipartCallbacks = {}

    def callback(self, name: CallbackName, *args: Any) -> None:
        """
        This function calls a provided callback with the given arguments.  A
        callback that was never set is silently skipped.
        """
        on_name = "on_" + name
        func = self.callbacks.get(on_name)
        if func is None:
            return
        self.logger.debug("Calling %s with %d argument(s)", on_name, len(args))
        func(*args)

    def set_callback(self, name: CallbackName, new_func: Callable[..., Any] | None) -> None:
        """
        Update the function for a callback.  Removes from the callbacks dict
        if new_func is None.
        """
        if new_func is None:
            self.callbacks.pop("on_" + name, None)  # type: ignore[misc]
        else:
            self.callbacks["on_" + name] = new_func  # type: ignore[literal-required]

    def __repr__(self) -> str:
        return "%s()" % self.__class__.__name__


def _find_separator(text: str) -> int:
    amp = text.find("&")
    semi = text.find(";")
    if amp < 0:
        return semi
    if semi < 0:
        return amp
    return min(amp, semi)


class QuerystringParser(BaseParser):
    """
    This is a parser for ``application/x-www-form-urlencoded`` text.  Both
    ``&`` and ``;`` separate fields, and may be mixed freely.

    | Callback Name  | Parameters      | Description                                         |
    |----------------|-----------------|-----------------------------------------------------|
    | on_field       | name, value     | Called with every decoded field, in body order.     |
    | on_end         | None            | Called when the whole text has been parsed.         |

    A segment without ``=`` is a field with an empty value, and so is every
    empty segment: leading, doubled and trailing separators each add a
    ``("", "")`` field.  Names and values are percent-decoded leniently: ``+``
    becomes a space and invalid escapes are kept as they are.
    """

    def __init__(self, callbacks: QuerystringCallbacks | None = None, charset: str = "utf-8") -> None:
        super().__init__()
        self.callbacks = dict(callbacks or {})  # type: ignore[assignment]
        self.charset = charset

    def parse(self, text: str) -> int:
        """Parses `text`, returning the number of fields found."""
        charset = self.charset
        count = 0
        trailing_separator = text[-1:] in ("&", ";")

        while text:
            equals_pos = text.find("=")
            sep_pos = _find_separator(text)

            if equals_pos < 0 or 0 <= sep_pos < equals_pos:
                # No value before the next separator.
                if sep_pos < 0:
                    name, text = text, ""
                else:
                    name, text = text[:sep_pos], text[sep_pos + 1 :]
                self.callback("field", form_decode(name, charset), "")
            else:
                name, text = text[:equals_pos], text[equals_pos + 1 :]
                sep_pos = _find_separator(text)
                if sep_pos < 0:
                    value, text = text, ""
                else:
                    value, text = text[:sep_pos], text[sep_pos + 1 :]
                self.callback("field", form_decode(name, charset), form_decode(value, charset))
            count += 1

        if trailing_separator:
            self.callback("field", "", "")
            count += 1

        self.callback("end")
        return count

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(charset={self.charset!r})"


class MultipartParser(BaseParser):
    """
    This class is a pull-based parser for ``multipart/form-data`` bodies.  It
    reads a stream from start to end exactly once.

    | Callback Name  | Parameters      | Description                                         |
    |----------------|-----------------|-----------------------------------------------------|
    | on_part_begin  | headers         | Called with the header block of every part.         |
    | on_field       | name, value     | Called with every part that is not a file upload.   |
    | on_file        | name, file_part | Called with every spooled, closed file upload.      |
    | on_end         | None            | Called after the closing boundary has been read.    |

    A part is a file upload when its Content-Disposition header carries a
    non-empty ``filename``.  File content is copied to a new `FileClass`
    instance; if the part declares a Content-Length, exactly that many bytes
    are copied and the boundary must follow immediately.  Everything after
    the closing boundary is read and discarded.

    :param boundary: The multipart boundary, without the leading ``--``.
    :param callbacks: A dictionary of callbacks.  See the table above.
    :param max_line_length: The maximum length of boundary and header lines.
    :param charset: Used to decode headers and field values.
    :param chunk_size: The number of bytes requested from the stream per read.
    :param FileClass: The class used for spooling file content.
    :param config: Configuration passed to `FileClass`.
    """

    def __init__(
        self,
        boundary: bytes | str,
        callbacks: MultipartCallbacks | None = None,
        max_line_length: int = 4096,
        charset: str = "utf-8",
        chunk_size: int = 65536,
        FileClass: type[FileProtocol] = File,
        config: FileConfig = {},
    ) -> None:
        super().__init__()
        self.state = MultipartState.EXPECT_PREAMBLE
        self.callbacks = dict(callbacks or {})  # type: ignore[assignment]

        if isinstance(boundary, bytes):
            boundary = boundary.decode("latin-1")
        if not 0 < len(boundary) <= MAX_BOUNDARY_LENGTH:
            raise ValueError("boundary must be 1 to %d characters long, not %r" % (MAX_BOUNDARY_LENGTH, boundary))
        if not isinstance(max_line_length, int) or max_line_length < 1:
            raise ValueError("max_line_length must be a positive number, not %r" % max_line_length)

        self.boundary = boundary
        self.max_line_length = max_line_length
        self.charset = charset
        self.chunk_size = chunk_size
        self.FileClass = FileClass
        self.config = config

        try:
            boundary_bytes = boundary.encode("latin-1")
        except UnicodeEncodeError:
            raise ValueError("boundary must be encodable as latin-1, not %r" % (boundary,))
        self.first_line = HYPHENS + boundary_bytes
        self.delimiter = CRLF + HYPHENS + boundary_bytes

    def parse(self, stream: SupportsRead | BoundaryReader) -> int:
        """
        Parses the whole body from `stream`, returning the number of bytes
        read from it.

        A parser reads exactly one body; calling this again raises ValueError.
        """
        if self.state != MultipartState.EXPECT_PREAMBLE:
            raise ValueError("%s has already been used to parse a body" % (self.__class__.__name__,))

        if isinstance(stream, BoundaryReader):
            reader = stream
        else:
            reader = BoundaryReader(stream, self.chunk_size)

        while self.state != MultipartState.DONE:
            if self.state == MultipartState.EXPECT_PREAMBLE:
                line = reader.read_line(self.max_line_length)
                if line != self.first_line:
                    raise reader.error("Expected boundary %r, got %r" % (self.first_line, line))
                self.state = MultipartState.EXPECT_PART

            elif self.state == MultipartState.EXPECT_PART:
                self.state = self._parse_part(reader)

            else:  # pragma: no cover (error case)
                raise reader.error("Reached an unknown state %d" % (self.state,))

        self.callback("end")
        return reader.position

    def _parse_part(self, reader: BoundaryReader) -> MultipartState:
        headers = read_headers(reader, self.max_line_length, self.charset)
        self.callback("part_begin", headers)

        disposition = headers.get("Content-Disposition")
        if disposition is None:
            raise reader.error("Missing Content-Disposition header in part")

        try:
            name, file_name = parse_content_disposition(disposition)
            if file_name:
                file_name = validate_filename(file_name)
        except MultipartParseError as e:
            e.offset = reader.position
            raise

        if file_name:
            part = self._read_file(reader, name, file_name, headers)
            self.callback("file", name, part)
        else:
            buffer = BytesIO()
            reader.copy_until(buffer, self.delimiter)
            self.callback("field", name, buffer.getvalue().decode(self.charset, errors="replace"))

        marker = reader.read_exact(2)
        if marker == HYPHENS:
            discarded = reader.drain()
            if discarded:
                self.logger.debug("Skipped %d bytes after the closing boundary", discarded)
            return MultipartState.DONE
        if marker != CRLF:
            raise reader.error("Expected CRLF or -- after boundary, got %r" % (marker,))
        return MultipartState.EXPECT_PART

    def _read_file(self, reader: BoundaryReader, name: str, file_name: str, headers: Headers) -> FilePart:
        content_length = headers.get("Content-Length")
        if content_length is not None:
            length = self._parse_content_length(reader, content_length)

        f = self.FileClass(file_name, name, config=self.config)
        try:
            if content_length is not None:
                reader.copy_exact(f, length)
                if not reader.skip_bytes(self.delimiter):
                    raise reader.error("Missing multipart boundary after %d bytes of file content" % (length,))
            else:
                reader.copy_until(f, self.delimiter)
            f.finalize()
        except Exception:
            self.logger.debug("Removing partially written file %r", f.actual_file_name)
            f.delete()
            raise
        f.close()

        self.logger.debug("file: %s", f.actual_file_name)
        return FilePart(name, file_name, headers, f.actual_file_name, f.size)

    def _parse_content_length(self, reader: BoundaryReader, value: str) -> int:
        # ASCII digits only: no sign, no underscores, no other scripts.
        digits = value.strip()
        if not (digits.isascii() and digits.isdigit()):
            raise reader.error("Invalid Content-Length %r in part" % (value,))
        return int(digits)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(boundary={self.boundary!r})"


class FormData(NamedTuple):
    """The decoded form: text fields and spooled file uploads, in body order."""

    fields: MultiDict
    files: MultiDict

    def delete_files(self) -> None:
        """Removes the spooled file of every uploaded file part."""
        for part in self.files.values():
            part.delete()


class FormParser:
    """
    This class is the all-in-one form parser.  Given the Content-Type header
    value of a request, it selects the right parser and calls `on_field` and
    `on_file` with everything decoded from the body.

    Content types other than ``application/x-www-form-urlencoded`` and
    ``multipart/form-data`` are declined: :meth:`parse` returns False and
    leaves the stream untouched.

    :param content_type: The full Content-Type header value.
    :param on_field: Called with ``(name, value)`` for every text field.
    :param on_file: Called with ``(name, FilePart)`` for every uploaded file.
    :param on_end: Called once the body has been parsed.
    :param boundary: Overrides the boundary from `content_type`.
    :param max_line_length: Overrides ``MAX_LINE_LENGTH`` from the config.
    :param FileClass: The class used for spooling file content.
    :param config: Configuration to use for this FormParser.  The default
                   values are taken from the DEFAULT_CONFIG value, and then
                   any keys present in this dictionary will overwrite the
                   default values.
    """

    #: This is the default configuration for our form parser.
    #: Note: all file sizes should be in bytes.
    DEFAULT_CONFIG: FormParserConfig = {
        "MAX_LINE_LENGTH": 4096,
        "CHUNK_SIZE": 64 * 1024,
        "CHARSET": "utf-8",
        "UPLOAD_DIR": None,
        "UPLOAD_KEEP_EXTENSIONS": False,
    }

    def __init__(
        self,
        content_type: str,
        on_field: OnFieldCallback | None,
        on_file: OnFileCallback | None,
        on_end: Callable[[], None] | None = None,
        boundary: bytes | str | None = None,
        max_line_length: int | None = None,
        FileClass: type[FileProtocol] = File,
        config: dict[Any, Any] = {},
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self.content_type = content_type
        self.media_type = content_type.split(";")[0].strip().lower()
        self.on_field = on_field
        self.on_file = on_file
        self.on_end = on_end

        self.config: FormParserConfig = self.DEFAULT_CONFIG.copy()
        self.config.update(config)  # type: ignore[typeddict-item]

        if max_line_length is None:
            max_line_length = self.config["MAX_LINE_LENGTH"]

        def _on_field(name: str, value: str) -> None:
            if self.on_field is not None:
                self.on_field(name, value)

        def _on_file(name: str, part: FilePart) -> None:
            if self.on_file is not None:
                self.on_file(name, part)

        def _on_end() -> None:
            if self.on_end is not None:
                self.on_end()

        parser: QuerystringParser | MultipartParser | None = None

        if self.media_type == "application/x-www-form-urlencoded":
            parser = QuerystringParser(
                callbacks={"on_field": _on_field, "on_end": _on_end},
                charset=self.config["CHARSET"],
            )

        elif self.media_type == "multipart/form-data":
            if boundary is None:
                boundary = parse_boundary(content_type)

            parser = MultipartParser(
                boundary,
                callbacks={"on_field": _on_field, "on_file": _on_file, "on_end": _on_end},
                max_line_length=max_line_length,
                charset=self.config["CHARSET"],
                chunk_size=self.config["CHUNK_SIZE"],
                FileClass=FileClass,
                config={
                    "UPLOAD_DIR": self.config["UPLOAD_DIR"],
                    "UPLOAD_KEEP_EXTENSIONS": self.config["UPLOAD_KEEP_EXTENSIONS"],
                },
            )

        else:
            self.logger.warning("Unknown Content-Type: %r", content_type)

        self.parser = parser

    @property
    def supported(self) -> bool:
        """Whether the content type is one this parser can decode."""
        return self.parser is not None

    def parse(self, stream: SupportsRead) -> bool:
        """
        Parses the request body from `stream`.  Returns False, without reading
        anything, if the content type was declined.
        """
        if self.parser is None:
            return False

        if isinstance(self.parser, QuerystringParser):
            chunks = []
            while True:
                chunk = stream.read(self.config["CHUNK_SIZE"])
                if not chunk:
                    break
                chunks.append(chunk)
            self.parser.parse(b"".join(chunks).decode(self.config["CHARSET"], errors="replace"))
        else:
            self.parser.parse(stream)
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(content_type={self.content_type!r}, parser={self.parser!r})"


def parse_urlencoded(text: str, charset: str = "utf-8") -> MultiDict:
    """
    Decodes an ``application/x-www-form-urlencoded`` string.

    ```python
    fields = parse_urlencoded("a=b;c;dee=asd&e=fgh&f=j%20l")
    assert fields["f"] == "j l"
    ```
    """
    fields = MultiDict()
    QuerystringParser(callbacks={"on_field": fields.append}, charset=charset).parse(text)
    return fields


def parse_multipart(
    stream: SupportsRead, boundary: bytes | str, max_line_length: int | None = None, config: dict[Any, Any] = {}
) -> FormData:
    """
    Decodes a ``multipart/form-data`` body delimited by `boundary`.

    Uploaded files are spooled to temporary files which the caller has to
    delete; see :meth:`FormData.delete_files`.
    """
    fields, files = MultiDict(), MultiDict()
    parser = FormParser(
        "multipart/form-data",
        fields.append,
        files.append,
        boundary=boundary,
        max_line_length=max_line_length,
        config=config,
    )
    parser.parse(stream)
    return FormData(fields, files)


def parse_form_data(
    content_type: str, stream: SupportsRead, max_line_length: int | None = None, config: dict[Any, Any] = {}
) -> FormData | None:
    """
    This function is useful if you just want to decode a request body without
    setting up callbacks.  It dispatches on `content_type` and returns the
    decoded fields and files, or None if the content type is neither
    ``application/x-www-form-urlencoded`` nor ``multipart/form-data``; the
    stream is not read in that case.

    ```python
    form = parse_form_data(request.headers["Content-Type"], request.stream)
    if form is not None:
        print(form.fields.get("username"))
    ```

    :param content_type: The full Content-Type header value.
    :param stream: A readable byte stream.  Must implement ``.read(size)``.
    :param max_line_length: The maximum length of multipart boundary and
                            header lines.
    :param config: Overrides for :attr:`FormParser.DEFAULT_CONFIG`.
    """
    fields, files = MultiDict(), MultiDict()
    parser = FormParser(content_type, fields.append, files.append, max_line_length=max_line_length, config=config)
    if not parser.parse(stream):
        return None
    return FormData(fields, files)
