"""Shared helpers for page objects."""
from __future__ import annotations

import sys

from playwright.sync_api import Page

from config import BrowserConfig
from normalizer import FAILURE_MARKER, SUCCESS_MARKER


class BasePage:
    """Page object base that reports each check on the console.

    Successful checks go to stdout behind the success marker and failures go
    to stderr as ``<failure marker> ERROR in ...``; the custom report turns
    these lines into the per-test validation list.
    """

    def __init__(self, page: Page, config: BrowserConfig | None = None):
        self.page = page
        self.config = config or BrowserConfig()

    def _expect_equal(self, actual: object, expected: object) -> None:
        if actual != expected:
            raise AssertionError(f"Expected {expected!r}, received {actual!r}")

    def _passed(self, message: str) -> None:
        print(f"{SUCCESS_MARKER} {message}")

    def _failed(self, message: str) -> None:
        print(f"{FAILURE_MARKER} ERROR in {message}", file=sys.stderr)
