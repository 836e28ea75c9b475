import atheris


class EnhancedDataProvider(atheris.FuzzedDataProvider):
    def ConsumeRandomBytes(self) -> bytes:
        return self.ConsumeBytes(self.ConsumeIntInRange(0, self.remaining_bytes()))

    def ConsumeRandomString(self) -> str:
        return self.ConsumeUnicodeNoSurrogates(self.ConsumeIntInRange(0, self.remaining_bytes()))

    def ConsumeBoundary(self) -> str:
        # 1 to 70 characters, as required for a multipart boundary.
        return self.ConsumeUnicodeNoSurrogates(self.ConsumeIntInRange(1, 70)) or "boundary"
