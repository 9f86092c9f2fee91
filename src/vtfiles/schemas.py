"""Response schemas for the VirusTotal v3 file endpoints.

Every endpoint answers with either its own success shape or the common
``{"error": {"code", "message"}}`` shape. Each operation validates the body
against the union of the two; anything else is rejected.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

VerdictCategory = Literal[
    "harmless",
    "malicious",
    "suspicious",
    "undetected",
    "timeout",
    "confirmed-timeout",
    "failure",
    "type-unsupported",
]


class VTModel(BaseModel):
    # strict: numbers must be numbers; extra: keep attributes we don't model
    model_config = ConfigDict(strict=True, extra="allow", populate_by_name=True)


class ErrorPayload(VTModel):
    code: str
    message: str


class ApiErrorResponse(VTModel):
    error: ErrorPayload


class Links(VTModel):
    self_: str = Field(alias="self")


class AnalysisStats(VTModel):
    harmless: int
    malicious: int
    suspicious: int
    undetected: int
    timeout: int
    confirmed_timeout: int = Field(alias="confirmed-timeout")
    failure: int
    type_unsupported: int = Field(alias="type-unsupported")


class EngineResult(VTModel):
    method: str
    engine_name: str
    engine_version: Optional[str]
    engine_update: Optional[str]
    category: VerdictCategory
    result: Optional[str]


class TridGuess(VTModel):
    file_type: str
    probability: float


class Votes(VTModel):
    harmless: int
    malicious: int


class FileAttributes(VTModel):
    md5: str
    sha1: str
    sha256: str
    ssdeep: Optional[str] = None
    tlsh: Optional[str] = None
    size: int

    first_submission_date: int
    last_submission_date: int
    last_modification_date: int
    last_analysis_date: int

    last_analysis_stats: AnalysisStats
    last_analysis_results: Dict[str, EngineResult]
    total_votes: Votes
    reputation: int
    times_submitted: int
    unique_sources: int

    names: List[str]
    tags: List[str]
    type_tags: List[str]
    type_description: str
    trid: Optional[List[TridGuess]] = None
    meaningful_name: Optional[str] = None
    type_tag: Optional[str] = None
    type_extension: Optional[str] = None
    magic: Optional[str] = None


class FileReport(VTModel):
    id: str
    type: str
    links: Links
    attributes: FileAttributes


class FileReportResponse(VTModel):
    data: FileReport


class UploadResult(VTModel):
    type: str
    id: str
    links: Links


class UploadResponse(VTModel):
    data: UploadResult


_http_url = TypeAdapter(HttpUrl)


class UploadURLResponse(VTModel):
    data: str

    @field_validator("data")
    @classmethod
    def _absolute_http_url(cls, value: str) -> str:
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("upload URL must be an absolute http(s) URL") from None
        return value


FileReportResult = Union[ApiErrorResponse, FileReportResponse]
UploadResultOrError = Union[ApiErrorResponse, UploadResponse]
UploadURLResult = Union[ApiErrorResponse, UploadURLResponse]

file_report_adapter = TypeAdapter(FileReportResult)
upload_adapter = TypeAdapter(UploadResultOrError)
upload_url_adapter = TypeAdapter(UploadURLResult)


def is_error(result) -> bool:
    """True when the service answered with an error payload."""
    return isinstance(result, ApiErrorResponse)
