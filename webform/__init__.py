from ._version import __version__
from .datastructures import Headers, MultiDict
from .encoders import StructuredMap, TextMap, encode_urlencoded, url_encode
from .multipart import (
    FilePart,
    FormData,
    FormParser,
    MultipartParser,
    QuerystringParser,
    parse_form_data,
    parse_multipart,
    parse_urlencoded,
)

__all__ = (
    "__version__",
    "FilePart",
    "FormData",
    "FormParser",
    "Headers",
    "MultiDict",
    "MultipartParser",
    "QuerystringParser",
    "StructuredMap",
    "TextMap",
    "encode_urlencoded",
    "parse_form_data",
    "parse_multipart",
    "parse_urlencoded",
    "url_encode",
)
