"""Fixtures for the browser suite."""
from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Dict

import pytest

from config import BrowserConfig, load_config
from run_recorder import RECORDER_KEY


@pytest.fixture(scope="session")
def browser_config() -> BrowserConfig:
    return load_config().browser


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: Dict[str, Any], browser_config: BrowserConfig) -> Dict[str, Any]:
    return {
        **browser_context_args,
        "viewport": {
            "width": browser_config.viewport_width,
            "height": browser_config.viewport_height,
        },
    }


@pytest.fixture
def run_step(request):
    """Context manager factory that records a named step for the report."""
    recorder = request.config.stash.get(RECORDER_KEY, None)

    def _step(title: str):
        if recorder is None:
            return nullcontext()
        return recorder.step(request.node.nodeid, title)

    return _step


@pytest.fixture
def attach(request):
    """Attach a payload (usually a screenshot) to the current test."""
    recorder = request.config.stash.get(RECORDER_KEY, None)

    def _attach(name: str, body: bytes, content_type: str = "image/png") -> None:
        if recorder is not None:
            recorder.attach(request.node.nodeid, name, body, content_type)

    return _attach
