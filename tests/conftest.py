"""Pytest fixtures and options for the E2E suite and report generator tests."""
from __future__ import annotations

import copy
import tempfile
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from run_document import RunDocument, parse_run_document
from run_recorder import RECORDER_KEY, RunRecorder


def pytest_addoption(parser):
    group = parser.getgroup("custom-report", "Custom report options")
    group.addoption(
        "--run-document",
        action="store",
        dest="run_document_path",
        default=None,
        help="Record the session as a JSON run document at this path",
    )
    group.addoption(
        "--custom-report",
        action="store",
        dest="custom_report_path",
        default=None,
        help="Also render the custom HTML report here at session end (requires --run-document)",
    )


def pytest_configure(config):
    document_path = config.getoption("run_document_path")
    if not document_path:
        return
    report_path = config.getoption("custom_report_path")
    recorder = RunRecorder(
        Path(document_path),
        report_path=Path(report_path) if report_path else None,
    )
    config.stash[RECORDER_KEY] = recorder
    config.pluginmanager.register(recorder, "run-recorder")


PNG_BODY = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="


@pytest.fixture
def raw_run() -> Dict[str, Any]:
    """A run document with a passed test (two steps, two screenshots) and a failed one."""
    return {
        "config": {"version": "1.45.0"},
        "suites": [
            {
                "title": "youTube.spec.ts",
                "file": "youTube.spec.ts",
                "specs": [
                    {
                        "title": "Verify video listing for TC001 : Playwright Tutorial",
                        "id": "a1b2c3",
                        "tests": [
                            {
                                "projectName": "chromium",
                                "results": [
                                    {
                                        "status": "passed",
                                        "duration": 12345,
                                        "startTime": "2024-05-01T10:15:30.123Z",
                                        "steps": [
                                            {"title": "Video Search Validations", "duration": 8000},
                                            {"title": "Video Share Validations", "duration": 4000},
                                        ],
                                        "stdout": [
                                            {"text": "✅ Navigation to \"https://www.youtube.com\" Completed Successfully.\n"},
                                            {"text": "✅ Video with title :\"Playwright Tutorial\" visible\n"},
                                        ],
                                        "stderr": [],
                                        "attachments": [
                                            {"name": "After Search Validation", "contentType": "image/png", "body": PNG_BODY},
                                            {"name": "trace", "contentType": "application/zip", "path": "/tmp/trace.zip"},
                                            {"name": "Before Share Validation", "contentType": "image/png", "body": PNG_BODY},
                                        ],
                                    }
                                ],
                            }
                        ],
                    },
                    {
                        "title": "Verify video listing for TC002 : Broken",
                        "id": "d4e5f6",
                        "tests": [
                            {
                                "projectName": "chromium",
                                "results": [
                                    {
                                        "status": "failed",
                                        "duration": 4321,
                                        "startTime": "2024-05-01T10:16:00.000Z",
                                        "steps": [
                                            {"title": "Video Search Validations", "duration": 4000},
                                        ],
                                        "stdout": [
                                            {"text": "✅ Video with title :\"Broken\" visible\n"},
                                        ],
                                        "stderr": [
                                            {"text": "❌ ERROR in Video Duration Expected : \"1:00\" and Received: \"2:00\"\n"},
                                        ],
                                        "attachments": [],
                                        "error": {"message": "Expected values to be equal"},
                                    },
                                    {
                                        "status": "passed",
                                        "duration": 1000,
                                        "startTime": "2024-05-01T10:17:00.000Z",
                                    },
                                ],
                            }
                        ],
                    },
                ],
            }
        ],
    }


@pytest.fixture
def run_document(raw_run: Dict[str, Any]) -> RunDocument:
    return parse_run_document(copy.deepcopy(raw_run))


@pytest.fixture
def two_suite_run() -> Dict[str, Any]:
    """Two suites with one test each: one passed via stdout check, one failed via stderr."""
    return {
        "suites": [
            {
                "file": "alpha.spec.ts",
                "specs": [
                    {
                        "title": "Test A",
                        "id": "spec-a",
                        "tests": [{"results": [{
                            "status": "passed",
                            "duration": 1500,
                            "startTime": "2024-01-01T00:00:00.000Z",
                            "steps": [],
                            "stdout": [{"text": "✅ ok\n"}],
                            "stderr": [],
                            "attachments": [],
                        }]}],
                    }
                ],
            },
            {
                "file": "beta.spec.ts",
                "specs": [
                    {
                        "title": "Test B",
                        "id": "spec-b",
                        "tests": [{"results": [{
                            "status": "failed",
                            "duration": 500,
                            "startTime": "2024-01-01T00:00:05.000Z",
                            "steps": [],
                            "stdout": [],
                            "stderr": [{"text": "ERROR in thing\n"}],
                            "attachments": [],
                        }]}],
                    }
                ],
            },
        ]
    }


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_page() -> MagicMock:
    """Stand-in for a Playwright page; locators are MagicMocks too."""
    page = MagicMock()
    page.url = "https://www.youtube.com/watch?v=abc"
    page.screenshot.return_value = b"\x89PNG"
    return page
