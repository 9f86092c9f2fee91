"""Async client for the VirusTotal v3 file endpoints."""

from .errors import ConfigError, FileTooLargeError, ResponseValidationError, TransportError, VirusTotalError
from .schemas import (
    ApiErrorResponse,
    ErrorPayload,
    FileReport,
    FileReportResponse,
    UploadResponse,
    UploadResult,
    UploadURLResponse,
    is_error,
)
from .virus_total import VirusTotalClient, get_file_report, get_upload_url, upload_file

__version__ = "0.1.0"

__all__ = [
    "ApiErrorResponse",
    "ConfigError",
    "ErrorPayload",
    "FileReport",
    "FileReportResponse",
    "FileTooLargeError",
    "ResponseValidationError",
    "TransportError",
    "UploadResponse",
    "UploadResult",
    "UploadURLResponse",
    "VirusTotalClient",
    "VirusTotalError",
    "get_file_report",
    "get_upload_url",
    "is_error",
    "upload_file",
]
