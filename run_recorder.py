"""Pytest plugin that records a session as a JSON run document.

Each test file becomes a suite, each test item a spec holding one test with a
single result. Captured stdout/stderr, named steps and attachments are kept so
the custom report can show the validations and screenshots of every test.
"""
from __future__ import annotations

import base64
import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import pytest

from config import ReportConfig
from generate_report import run_from_config
from test_types import FAILED, PASSED, SKIPPED


def _console_entries(text: str) -> List[Dict[str, str]]:
    return [{"text": line + "\n"} for line in text.splitlines() if line.strip()]


def _iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _spec_title(item: pytest.Item) -> str:
    """First docstring line of the test, with ``{id}`` filled from the parametrize id."""
    doc = getattr(getattr(item, "obj", None), "__doc__", None)
    if not doc or not doc.strip():
        return item.name
    title = doc.strip().splitlines()[0]
    callspec = getattr(item, "callspec", None)
    return title.replace("{id}", callspec.id if callspec else "").strip()


class RunRecorder:
    """Collects test outcomes and writes them in the run document schema."""

    def __init__(
        self,
        document_path: Path,
        report_path: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.document_path = document_path
        self.report_path = report_path
        self.logger = logger or logging.getLogger("run_recorder")
        self._suites: Dict[str, Dict[str, Any]] = {}
        self._started: Dict[str, float] = {}
        self._steps: Dict[str, List[Dict[str, Any]]] = {}
        self._attachments: Dict[str, List[Dict[str, Any]]] = {}
        self._phases: Dict[str, Dict[str, Any]] = {}

    # Recording API used by fixtures and hooks

    def start_test(self, nodeid: str, started_at: Optional[float] = None) -> None:
        self._started[nodeid] = time.time() if started_at is None else started_at
        self._steps[nodeid] = []
        self._attachments[nodeid] = []
        self._phases[nodeid] = {"status": PASSED, "duration": 0.0, "error": None}

    @contextmanager
    def step(self, nodeid: str, title: str) -> Iterator[None]:
        """Time a named step of the running test."""
        entry: Dict[str, Any] = {"title": title, "duration": 0}
        start = time.perf_counter()
        try:
            yield
        except Exception as exc:
            entry["error"] = {"message": str(exc)}
            raise
        finally:
            entry["duration"] = round((time.perf_counter() - start) * 1000)
            self._steps.setdefault(nodeid, []).append(entry)

    def attach(self, nodeid: str, name: str, body: bytes, content_type: str = "image/png") -> None:
        self._attachments.setdefault(nodeid, []).append({
            "name": name,
            "contentType": content_type,
            "body": base64.b64encode(body).decode("ascii"),
        })

    def record_phase(
        self,
        nodeid: str,
        outcome: str,
        duration_seconds: float,
        error_message: Optional[str] = None,
    ) -> None:
        """Fold one setup/call/teardown outcome into the test's status."""
        phase = self._phases.setdefault(nodeid, {"status": PASSED, "duration": 0.0, "error": None})
        phase["duration"] += duration_seconds
        if outcome == FAILED:
            phase["status"] = FAILED
            if phase["error"] is None:
                phase["error"] = error_message
        elif outcome == SKIPPED and phase["status"] == PASSED:
            phase["status"] = SKIPPED

    def finish_test(
        self,
        nodeid: str,
        file: str,
        title: str,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Store the finished test under its file's suite."""
        phase = self._phases.pop(nodeid, {"status": PASSED, "duration": 0.0, "error": None})
        started = self._started.pop(nodeid, time.time())
        result: Dict[str, Any] = {
            "status": phase["status"],
            "duration": round(phase["duration"] * 1000),
            "startTime": _iso(started),
            "retry": 0,
            "steps": self._steps.pop(nodeid, []),
            "stdout": _console_entries(stdout),
            "stderr": _console_entries(stderr),
            "attachments": self._attachments.pop(nodeid, []),
        }
        if phase["error"]:
            result["error"] = {"message": phase["error"]}

        suite = self._suites.setdefault(file, {"title": file, "file": file, "specs": []})
        suite["specs"].append({
            "title": title,
            "id": nodeid,
            "tests": [{"projectName": "", "results": [result]}],
        })

    def to_document(self) -> Dict[str, Any]:
        return {"suites": list(self._suites.values())}

    def write(self) -> Path:
        self.document_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.document_path, "w", encoding="utf-8") as f:
            json.dump(self.to_document(), f, indent=2, ensure_ascii=False)
        return self.document_path

    # Pytest hooks

    def pytest_runtest_logstart(self, nodeid: str, location: Any) -> None:
        self.start_test(nodeid)

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item: pytest.Item, call: pytest.CallInfo) -> Iterator[None]:
        outcome = yield
        report = outcome.get_result()

        error_message = None
        if report.failed and call.excinfo is not None:
            error_message = str(call.excinfo.value) or call.excinfo.typename
        self.record_phase(item.nodeid, report.outcome, report.duration, error_message)

        if call.when == "teardown":
            # Teardown reports carry the output captured across all phases.
            self.finish_test(
                item.nodeid,
                file=report.location[0],
                title=_spec_title(item),
                stdout=report.capstdout,
                stderr=report.capstderr,
            )

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        path = self.write()
        self.logger.info(f"Run document written: {path}")
        if self.report_path is None:
            return
        run_from_config(
            ReportConfig(input_path=self.document_path, output_path=self.report_path),
            self.logger,
        )


RECORDER_KEY = pytest.StashKey[RunRecorder]()
