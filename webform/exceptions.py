class FormParserError(ValueError):
    """Base error class for our form parser."""
    pass


class ParseError(FormParserError):
    """This exception (or a subclass) is raised when there is an error while
    parsing something.
    """

    #: This is the offset in the input stream at which the parse error was
    #: detected.  It will be -1 if not specified.
    offset = -1


class MultipartParseError(ParseError):
    """This is a specific error that is raised when the MultipartParser detects
    a malformed body: a boundary mismatch, a missing Content-Disposition
    header, unexpected bytes after a part or a premature end of the stream.
    """
    pass


class LimitExceededError(ParseError):
    """This exception is raised when a line read for boundary or header
    purposes is longer than the configured maximum line length.
    """
    pass


class FileError(FormParserError, OSError):
    """Exception class for problems with the File class."""
    pass
