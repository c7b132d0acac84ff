"""Schema and loader for the JSON run document produced by a test execution.

The document follows the Playwright JSON reporter layout: suites hold specs,
specs hold tests, and every test holds one result per attempt. Only the fields
the report generator reads are modelled; anything else is ignored so that
minor upstream schema drift does not break report generation.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from exceptions import MalformedInputError, MissingInputError


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Read explicit nulls as missing so field defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ConsoleEntry(_Lenient):
    """One chunk of captured stdout/stderr."""

    text: Optional[str] = None


class ErrorInfo(_Lenient):
    message: Optional[str] = None
    stack: Optional[str] = None


class Attachment(_Lenient):
    """File or inline payload attached to a result."""

    name: str = ""
    content_type: str = Field(default="", alias="contentType")
    body: Optional[str] = None
    path: Optional[str] = None


class Step(_Lenient):
    title: str = ""
    duration: float = 0
    error: Optional[ErrorInfo] = None


class TestAttempt(_Lenient):
    """A single execution attempt of a test."""

    status: str = ""
    duration: float = 0
    start_time: str = Field(default="", alias="startTime")
    retry: int = 0
    steps: List[Step] = Field(default_factory=list)
    stdout: List[ConsoleEntry] = Field(default_factory=list)
    stderr: List[ConsoleEntry] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
    error: Optional[ErrorInfo] = None

    @field_validator("stdout", "stderr", mode="before")
    @classmethod
    def wrap_plain_lines(cls, v: Any) -> Any:
        """Accept bare strings as console entries."""
        if isinstance(v, list):
            return [{"text": item} if isinstance(item, str) else item for item in v]
        return v


class TestEntry(_Lenient):
    project_name: str = Field(default="", alias="projectName")
    results: List[TestAttempt] = Field(min_length=1)


class Spec(_Lenient):
    title: str = ""
    id: str = ""
    tests: List[TestEntry] = Field(default_factory=list)


class Suite(_Lenient):
    title: str = ""
    file: str = ""
    specs: List[Spec] = Field(default_factory=list)


class RunDocument(_Lenient):
    """Root of the run document."""

    suites: List[Suite] = Field(default_factory=list)


def parse_run_document(data: Any, file_path: Optional[str] = None) -> RunDocument:
    """Validate an already-decoded run document."""
    if not isinstance(data, dict):
        raise MalformedInputError("Run document must be a JSON object", file_path=file_path)
    try:
        return RunDocument.model_validate(data)
    except ValidationError as exc:
        raise MalformedInputError(
            f"Run document does not match the expected schema: {exc.error_count()} error(s), "
            f"first at {'.'.join(str(p) for p in exc.errors()[0]['loc'])}",
            file_path=file_path,
        ) from exc


def load_run_document(path: Path) -> RunDocument:
    """Load and validate the run document at ``path``."""
    if not path.exists():
        raise MissingInputError(str(path))
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedInputError(f"Failed to read run document: {exc}", file_path=str(path)) from exc
    return parse_run_document(data, file_path=str(path))
