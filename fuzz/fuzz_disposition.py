import sys

import atheris
from helpers import EnhancedDataProvider

with atheris.instrument_imports():
    from webform.exceptions import MultipartParseError
    from webform.multipart import parse_content_disposition, validate_filename


def TestOneInput(data: bytes) -> None:
    fdp = EnhancedDataProvider(data)
    try:
        name, file_name = parse_content_disposition(fdp.ConsumeRandomString())
        if file_name:
            validate_filename(file_name)
    except MultipartParseError:
        return


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
