from __future__ import annotations

import copy

import httpx
import pytest

from vtfiles.virus_total import VirusTotalClient

API_KEY = "test-api-key"
BASE_URL = "https://vt.test/api/v3"

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
EMPTY_SHA1 = "da39a3ee5e6b4b0d3255bfef95601890afd80709"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

UPLOAD_URL = "https://www.virustotal.com/_ah/upload/AMmfu6bJ8hJ2Zc1s/"

_REPORT = {
    "data": {
        "id": EMPTY_SHA256,
        "type": "file",
        "links": {"self": f"https://www.virustotal.com/api/v3/files/{EMPTY_SHA256}"},
        "attributes": {
            "md5": EMPTY_MD5,
            "sha1": EMPTY_SHA1,
            "sha256": EMPTY_SHA256,
            "ssdeep": "3::",
            "tlsh": "TNULL",
            "size": 0,
            "first_submission_date": 1148301722,
            "last_submission_date": 1729252512,
            "last_modification_date": 1729260000,
            "last_analysis_date": 1729252512,
            "last_analysis_stats": {
                "harmless": 0,
                "malicious": 2,
                "suspicious": 1,
                "undetected": 57,
                "timeout": 0,
                "confirmed-timeout": 0,
                "failure": 0,
                "type-unsupported": 14,
            },
            "last_analysis_results": {
                "Bkav": {
                    "method": "blacklist",
                    "engine_name": "Bkav",
                    "engine_version": "2.0.0.1",
                    "engine_update": "20241018",
                    "category": "undetected",
                    "result": None,
                },
                "Jiangmin": {
                    "method": "blacklist",
                    "engine_name": "Jiangmin",
                    "engine_version": "16.0.100",
                    "engine_update": "20241017",
                    "category": "malicious",
                    "result": "Trojan.Generic.empty",
                },
                "Zillya": {
                    "method": "blacklist",
                    "engine_name": "Zillya",
                    "engine_version": None,
                    "engine_update": None,
                    "category": "malicious",
                    "result": "Trojan.Generic.empty",
                },
                "Gridinsoft": {
                    "method": "blacklist",
                    "engine_name": "Gridinsoft",
                    "engine_version": "1.0.190.174",
                    "engine_update": "20241018",
                    "category": "suspicious",
                    "result": "Suspicious.Empty",
                },
                "Avast-Mobile": {
                    "method": "blacklist",
                    "engine_name": "Avast-Mobile",
                    "engine_version": "241018-00",
                    "engine_update": "20241018",
                    "category": "type-unsupported",
                    "result": None,
                },
            },
            "total_votes": {"harmless": 12, "malicious": 3},
            "reputation": 0,
            "times_submitted": 4721453,
            "unique_sources": 187402,
            "names": ["empty.txt", "blank"],
            "tags": ["zero-filled"],
            "type_tags": ["text"],
            "type_description": "Text",
            "trid": [{"file_type": "Empty file", "probability": 100}],
            "meaningful_name": "empty.txt",
            "type_tag": "text",
            "type_extension": "txt",
            "magic": "empty",
            "first_seen_itw_date": 1220000000,
        },
    }
}

_UPLOAD = {
    "data": {
        "type": "analysis",
        "id": "NjY0MjRlOTFjMDIyYTkyNWM0NjU2NWQzYWNlMzFmZmI6MTcyOTI1MjUxMg==",
        "links": {
            "self": "https://www.virustotal.com/api/v3/analyses/"
            "NjY0MjRlOTFjMDIyYTkyNWM0NjU2NWQzYWNlMzFmZmI6MTcyOTI1MjUxMg=="
        },
    }
}


def report_payload() -> dict:
    return copy.deepcopy(_REPORT)


def upload_payload() -> dict:
    return copy.deepcopy(_UPLOAD)


def error_payload(code: str = "NotFoundError", message: str = "File not found") -> dict:
    return {"error": {"code": code, "message": message}}


class Recorder:
    """MockTransport handler that answers with a fixed response and keeps the requests."""

    def __init__(self, json=None, status_code=200, content=None, exc=None):
        self.json = json
        self.status_code = status_code
        self.content = content
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client():
    def _make(handler) -> VirusTotalClient:
        return VirusTotalClient(api_key=API_KEY, base_url=BASE_URL, transport=httpx.MockTransport(handler))

    return _make
