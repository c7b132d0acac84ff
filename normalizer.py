"""Flatten a run document into per-test records and run-level aggregates."""
from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from run_document import Attachment, ConsoleEntry, RunDocument, Spec, Suite, TestAttempt
from test_types import (
    FAILED,
    PASSED,
    SKIPPED,
    NormalizedRun,
    RunAggregates,
    StepOutcome,
    TestRecord,
    Validation,
)

SUCCESS_MARKER = "✅"
FAILURE_MARKER = "❌"
ERROR_PREFIX = "ERROR in "
ERROR_TOKEN = "Error"
FALLBACK_FAILURE_MESSAGE = "Test failed"

KNOWN_STATUSES = (PASSED, FAILED, SKIPPED)


def build_test_id(suite_file: str, suite_idx: int, spec_idx: int, test_idx: int) -> str:
    """Composite key, unique within one run only."""
    stem, _ = os.path.splitext(suite_file)
    return f"{stem}-{suite_idx}-{spec_idx}-{test_idx}"


def _strip_marker(text: str, marker: str) -> str:
    message = text[len(marker):]
    if message.startswith(" "):
        message = message[1:]
    return message


def _lines(entries: Iterable[ConsoleEntry]) -> Iterator[str]:
    for entry in entries:
        if entry.text is not None:
            yield entry.text.strip()


def extract_validations(attempt: TestAttempt) -> Tuple[Validation, ...]:
    """Collect pass/fail checks from the console output of one attempt."""
    validations: List[Validation] = []

    for text in _lines(attempt.stdout):
        if text.startswith(SUCCESS_MARKER):
            validations.append(Validation("pass", _strip_marker(text, SUCCESS_MARKER)))
        elif text.startswith(FAILURE_MARKER):
            validations.append(Validation("fail", _strip_marker(text, FAILURE_MARKER)))

    for text in _lines(attempt.stderr):
        if not (
            text.startswith(FAILURE_MARKER)
            or text.startswith(ERROR_PREFIX.rstrip())
            or ERROR_TOKEN in text
        ):
            continue
        message = text
        if message.startswith(FAILURE_MARKER + " "):
            message = message[len(FAILURE_MARKER) + 1:]
        if message.startswith(ERROR_PREFIX):
            message = message[len(ERROR_PREFIX):]
        # Exact-text dedup against everything collected so far, either type.
        if not any(v.message == message for v in validations):
            validations.append(Validation("fail", message))

    if attempt.status == FAILED and not validations:
        message = attempt.error.message if attempt.error and attempt.error.message else None
        validations.append(Validation("fail", message or FALLBACK_FAILURE_MESSAGE))

    return tuple(validations)


def extract_screenshots(attachments: Sequence[Attachment]) -> Dict[str, str]:
    """Map attachment name to data URI for inline image attachments."""
    screenshots: Dict[str, str] = {}
    for att in attachments:
        if att.content_type.startswith("image/") and att.body:
            screenshots[att.name] = f"data:{att.content_type};base64,{att.body}"
    return screenshots


def collapse_step_status(test_status: str) -> str:
    return PASSED if test_status == PASSED else FAILED


def iter_tests(document: RunDocument) -> Iterator[Tuple[str, Suite, Spec, TestAttempt]]:
    """Yield (test id, suite, spec, first attempt) in document order."""
    for suite_idx, suite in enumerate(document.suites):
        for spec_idx, spec in enumerate(suite.specs):
            for test_idx, test in enumerate(spec.tests):
                test_id = build_test_id(suite.file, suite_idx, spec_idx, test_idx)
                # Retries beyond the first attempt are not reported.
                yield test_id, suite, spec, test.results[0]


def build_record(test_id: str, suite: Suite, spec: Spec, attempt: TestAttempt) -> TestRecord:
    step_status = collapse_step_status(attempt.status)
    return TestRecord(
        id=test_id,
        title=spec.title,
        status=attempt.status,
        duration=attempt.duration,
        start_time=attempt.start_time,
        suite=suite.file,
        spec_id=spec.id,
        steps=tuple(
            StepOutcome(title=step.title, status=step_status, duration=step.duration)
            for step in attempt.steps
        ),
        validations=extract_validations(attempt),
        screenshots=extract_screenshots(attempt.attachments),
    )


def summarize(records: Sequence[TestRecord]) -> RunAggregates:
    counts = {status: 0 for status in KNOWN_STATUSES}
    for record in records:
        if record.status in counts:
            counts[record.status] += 1
    return RunAggregates(
        passed=counts[PASSED],
        failed=counts[FAILED],
        skipped=counts[SKIPPED],
        total=len(records),
    )


def collect_step_columns(records: Sequence[TestRecord]) -> Tuple[str, ...]:
    """Distinct step titles in order of first occurrence."""
    seen: Dict[str, None] = {}
    for record in records:
        for step in record.steps:
            seen.setdefault(step.title, None)
    return tuple(seen)


def normalize(document: RunDocument, logger: Optional[logging.Logger] = None) -> NormalizedRun:
    """Build the immutable report snapshot for ``document``."""
    logger = logger or logging.getLogger("normalizer")

    records = []
    for test_id, suite, spec, attempt in iter_tests(document):
        if attempt.status not in KNOWN_STATUSES:
            logger.warning(
                f"Test {test_id} has unrecognized status {attempt.status!r}; "
                "it is listed but not counted"
            )
        records.append(build_record(test_id, suite, spec, attempt))

    run = NormalizedRun(
        records=tuple(records),
        aggregates=summarize(records),
        step_columns=collect_step_columns(records),
    )
    logger.debug(
        f"Normalized {run.aggregates.total} test(s) with {len(run.step_columns)} step column(s)"
    )
    return run
