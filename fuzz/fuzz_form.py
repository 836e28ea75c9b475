import io
import sys
import tempfile

import atheris
from helpers import EnhancedDataProvider

with atheris.instrument_imports():
    from webform.multipart import parse_form_data

UPLOAD_DIR = tempfile.mkdtemp(prefix="webform-fuzz-")


def parse_url_encoded(fdp: EnhancedDataProvider) -> None:
    parse_form_data("application/x-www-form-urlencoded", io.BytesIO(fdp.ConsumeRandomBytes()))


def parse_multipart_form_data(fdp: EnhancedDataProvider) -> None:
    boundary = "boundary"
    body = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="field"\r\n\r\n'
        f"{fdp.ConsumeRandomString()}\r\n"
        f"--{boundary}--\r\n"
    )
    parse_form_data(
        f"multipart/form-data; boundary={boundary}",
        io.BytesIO(body.encode("latin1", errors="ignore")),
    )


def parse_multipart_raw(fdp: EnhancedDataProvider) -> None:
    boundary = fdp.ConsumeBoundary().replace('"', "")
    form = parse_form_data(
        f'multipart/form-data; boundary="{boundary}"',
        io.BytesIO(fdp.ConsumeRandomBytes()),
        max_line_length=256,
        config={"UPLOAD_DIR": UPLOAD_DIR},
    )
    if form is not None:
        form.delete_files()


def TestOneInput(data: bytes) -> None:
    fdp = EnhancedDataProvider(data)
    targets = [parse_url_encoded, parse_multipart_form_data, parse_multipart_raw]
    target = fdp.PickValueInList(targets)

    try:
        target(fdp)
    except ValueError:
        return


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
