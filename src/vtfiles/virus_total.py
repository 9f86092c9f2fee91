import logging
from functools import lru_cache
from typing import Optional

import httpx
from pydantic import ValidationError

from . import config
from .errors import ConfigError, FileTooLargeError, ResponseValidationError, TransportError
from .schemas import (
    FileReportResult,
    UploadResultOrError,
    UploadURLResult,
    file_report_adapter,
    is_error,
    upload_adapter,
    upload_url_adapter,
)
from .utils import is_valid_hash

logger = logging.getLogger(__name__)


class VirusTotalClient:
    """Client for the file endpoints of the VirusTotal API v3.

    Each call is one request through its own ``httpx.AsyncClient``; nothing
    is shared between calls, so they can run concurrently. Upstream error
    payloads are returned as ``ApiErrorResponse``; transport failures and
    unexpected bodies raise ``TransportError`` / ``ResponseValidationError``.
    """

    def __init__(self, api_key=None, base_url=None, timeout=None, upload_timeout=None, transport=None):
        self.api_key = api_key or config.VT_API_KEY
        if not self.api_key:
            raise ConfigError("VT_API_KEY is not set")
        self.base_url = (base_url or config.VT_API_URL).rstrip("/")
        self.headers = {"X-Apikey": self.api_key}
        self.timeout = timeout if timeout is not None else config.seconds("VT_TIMEOUT", config.VT_TIMEOUT)
        self.upload_timeout = upload_timeout if upload_timeout is not None else config.seconds("VT_UPLOAD_TIMEOUT", config.VT_UPLOAD_TIMEOUT)
        # tests plug an httpx.MockTransport in here
        self._transport = transport

    async def _request(self, method, url, adapter, endpoint, timeout, **kwargs):
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {endpoint} failed: {e!r}")
            raise TransportError(f"{method} {endpoint} failed: {e}") from e

        try:
            result = adapter.validate_json(response.content)
        except ValidationError as e:
            logger.error(
                f"Unexpected response from {method} {endpoint} "
                f"(HTTP {response.status_code}, {e.error_count()} validation errors)"
            )
            raise ResponseValidationError(
                f"{method} {endpoint} returned a body matching neither the success nor the error schema",
                body=response.text,
            ) from e

        if is_error(result):
            logger.warning(f"{method} {endpoint}: {result.error.code}: {result.error.message}")
        return result

    async def get_file_report(self, file_hash: str) -> FileReportResult:
        file_hash = file_hash.strip()
        if not is_valid_hash(file_hash):
            raise ValueError(f"Not an MD5/SHA1/SHA256 hex digest: {file_hash!r}")

        result = await self._request(
            "GET",
            f"{self.base_url}/files/{file_hash}",
            file_report_adapter,
            endpoint="/files/{hash}",
            timeout=self.timeout,
            headers=self.headers,
        )
        if not is_error(result):
            stats = result.data.attributes.last_analysis_stats
            logger.info(f"Report for {file_hash}: {stats.malicious} malicious, {stats.suspicious} suspicious")
        return result

    async def upload_file(self, filename: str, content, password: Optional[str] = None, upload_url: Optional[str] = None) -> UploadResultOrError:
        """Submit a file for analysis.

        ``content`` may be bytes or text (sent as UTF-8). POST /files takes
        files below 32 MB; bigger content is refused with FileTooLargeError
        unless ``upload_url`` (from get_upload_url) is given, in which case
        the file is posted there instead.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        if upload_url is None:
            if len(content) >= config.MAX_UPLOAD_SIZE:
                raise FileTooLargeError(len(content), config.MAX_UPLOAD_SIZE)
            url = f"{self.base_url}/files"
            endpoint = "/files"
        else:
            url = upload_url
            endpoint = "upload_url"

        files = {"file": (filename, content)}
        data = {"password": password} if password else None

        result = await self._request(
            "POST",
            url,
            upload_adapter,
            endpoint=endpoint,
            timeout=self.upload_timeout,
            headers={**self.headers, "Accept": "application/json"},
            files=files,
            data=data,
        )
        if not is_error(result):
            logger.info(f"Uploaded {filename} ({len(content)} bytes), analysis ID: {result.data.id}")
        return result

    async def get_upload_url(self) -> UploadURLResult:
        """Get a one-off URL for uploading a file larger than 32 MB."""
        result = await self._request(
            "GET",
            f"{self.base_url}/files/upload_url",
            upload_url_adapter,
            endpoint="/files/upload_url",
            timeout=self.timeout,
            headers=self.headers,
        )
        if not is_error(result):
            logger.info("Got upload URL for a large file")
        return result


@lru_cache(maxsize=None)
def default_client() -> VirusTotalClient:
    return VirusTotalClient()


async def get_file_report(file_hash: str) -> FileReportResult:
    return await default_client().get_file_report(file_hash)


async def upload_file(filename: str, content, password: Optional[str] = None, upload_url: Optional[str] = None) -> UploadResultOrError:
    return await default_client().upload_file(filename, content, password=password, upload_url=upload_url)


async def get_upload_url() -> UploadURLResult:
    return await default_client().get_upload_url()
