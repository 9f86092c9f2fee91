class VirusTotalError(Exception):
    """Base class for failures that abort a VirusTotal request."""


class ConfigError(VirusTotalError):
    pass


class TransportError(VirusTotalError):
    """The HTTP exchange itself failed (connection, timeout, protocol)."""


class ResponseValidationError(VirusTotalError):
    """The response body matched neither the success nor the error schema."""

    def __init__(self, message, body=None):
        super().__init__(message)
        self.body = body


class FileTooLargeError(ValueError):
    def __init__(self, size, limit):
        super().__init__(
            f"File is {size} bytes, POST /files accepts less than {limit} bytes; "
            f"request an upload URL for large files"
        )
        self.size = size
        self.limit = limit
