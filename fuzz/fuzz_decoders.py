import sys

import atheris
from helpers import EnhancedDataProvider

with atheris.instrument_imports():
    from webform.decoders import form_decode, form_quote, url_decode, url_quote


def fuzz_form_roundtrip(fdp: EnhancedDataProvider) -> None:
    value = fdp.ConsumeRandomString()
    assert form_decode(form_quote(value)) == value


def fuzz_url_roundtrip(fdp: EnhancedDataProvider) -> None:
    value = fdp.ConsumeRandomString()
    assert url_decode(url_quote(value)) == value


def fuzz_lenient_decode(fdp: EnhancedDataProvider) -> None:
    form_decode(fdp.ConsumeRandomString())


def TestOneInput(data: bytes) -> None:
    fdp = EnhancedDataProvider(data)
    targets = [fuzz_form_roundtrip, fuzz_url_roundtrip, fuzz_lenient_decode]
    target = fdp.PickValueInList(targets)
    target(fdp)


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
