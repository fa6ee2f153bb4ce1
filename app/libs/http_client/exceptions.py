class HttpClientError(Exception):
    detail: str = "HTTP client error."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        self.detail = detail or self.detail


class UnrecognizedFormatError(HttpClientError):
    detail = "Unrecognized format."

    def __init__(self, format: str):
        super().__init__(f"Unrecognized format '{format}'")
        self.format = format


class ContentParseError(HttpClientError):
    detail = "Unable to parse message content."

    def __init__(self, format: str, detail: str | None = None):
        super().__init__(detail)
        self.format = format


class ContentFormatError(HttpClientError):
    detail = "Unable to format message data."

    def __init__(self, format: str, detail: str | None = None):
        super().__init__(detail)
        self.format = format
