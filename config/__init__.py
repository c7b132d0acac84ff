"""Configuration module for the E2E suite and report generator."""
from config.models import (
    BrowserConfig,
    ReportConfig,
    SuiteConfig,
    load_config,
)

__all__ = [
    "BrowserConfig",
    "ReportConfig",
    "SuiteConfig",
    "load_config",
]
