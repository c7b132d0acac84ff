"""Screenshot helper that attaches PNGs to the current test."""
from __future__ import annotations

from typing import Callable, Optional

from playwright.sync_api import Page

Attach = Callable[[str, bytes, str], None]

DEFAULT_STEP_NAME = "Generic Screen Shot"


def capture_step(page: Page, attach: Attach, step_name: Optional[str] = None) -> None:
    """Take a viewport screenshot and attach it under ``step_name``."""
    attach(step_name or DEFAULT_STEP_NAME, page.screenshot(), "image/png")
