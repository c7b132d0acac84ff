"""Pydantic configuration models for the E2E suite and report generator."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from exceptions import ConfigFileNotFoundError


# Load .env file if present
load_dotenv()

DEFAULT_CONFIG_FILE = Path("e2e.json")
DEFAULT_CHART_SCRIPT_URL = "https://cdn.jsdelivr.net/npm/chart.js@4.4.3/dist/chart.umd.min.js"


def _apply_env(data: Any, env_mapping: dict[str, str]) -> Any:
    """Fill unset fields from environment variables."""
    if not isinstance(data, dict):
        return data
    for field_name, env_var in env_mapping.items():
        if field_name not in data or data[field_name] is None:
            env_value = os.getenv(env_var)
            if env_value:
                data[field_name] = env_value
    return data


class ReportConfig(BaseModel):
    """Custom HTML report configuration."""

    input_path: Path = Field(
        default=Path("test-results/report.json"),
        description="Run document produced by the test execution",
    )
    output_path: Path = Field(
        default=Path("test-results/customReport.html"),
        description="Where the generated HTML report is written",
    )
    title: str = Field(
        default="Playwright Test Report",
        min_length=1,
        description="Heading shown at the top of the report",
    )
    chart_script_url: str = Field(
        default=DEFAULT_CHART_SCRIPT_URL,
        description="Chart.js script referenced by the report",
    )
    report_link_base: str = Field(
        default="../test-results/index.html",
        description="Per-test deep links are built on this page",
    )

    @field_validator("input_path", "output_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: Any) -> Path:
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v)
        return v

    @model_validator(mode="before")
    @classmethod
    def load_from_env(cls, data: Any) -> Any:
        """Load values from environment variables if not explicitly set."""
        return _apply_env(data, {
            "input_path": "E2E_REPORT_INPUT",
            "output_path": "E2E_REPORT_OUTPUT",
        })


class BrowserConfig(BaseModel):
    """Browser configuration for the page-object suite."""

    browser: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to use",
    )
    headless: bool = Field(
        default=True,
        description="Run browser in headless mode",
    )
    viewport_width: int = Field(
        default=1280,
        ge=800,
        le=3840,
        description="Browser viewport width",
    )
    viewport_height: int = Field(
        default=720,
        ge=600,
        le=2160,
        description="Browser viewport height",
    )
    base_url: str = Field(
        default="https://www.youtube.com",
        description="Site under test",
    )
    navigation_timeout_ms: int = Field(
        default=10000,
        ge=1000,
        le=120000,
        description="Timeout for page loads",
    )
    action_timeout_ms: int = Field(
        default=5000,
        ge=500,
        le=60000,
        description="Timeout for waits on individual elements",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base_url doesn't have trailing slash."""
        return v.rstrip("/")

    @model_validator(mode="before")
    @classmethod
    def load_from_env(cls, data: Any) -> Any:
        """Load values from environment variables if not explicitly set."""
        return _apply_env(data, {
            "base_url": "E2E_BASE_URL",
            "browser": "E2E_BROWSER",
        })


class SuiteConfig(BaseModel):
    """Root configuration model combining all config sections."""

    report: ReportConfig = Field(default_factory=ReportConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging",
    )


def load_config(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[dict[str, Any]] = None,
) -> SuiteConfig:
    """
    Load configuration from file with CLI overrides.

    Priority (highest to lowest):
    1. CLI arguments
    2. Config file
    3. Environment variables (only for fields the file leaves unset)
    4. Defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE
    elif not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix in {".yaml", ".yml"}:
                import yaml
                config_data = yaml.safe_load(f) or {}
            else:
                config_data = json.load(f)

    config = SuiteConfig.model_validate(config_data)

    if cli_overrides:
        config_dict = config.model_dump()
        _apply_overrides(config_dict, cli_overrides)
        config = SuiteConfig.model_validate(config_dict)

    return config


def _apply_overrides(config_dict: dict[str, Any], overrides: dict[str, Any]) -> None:
    """Apply CLI overrides to config dictionary."""
    override_mapping = {
        "input": ("report", "input_path"),
        "output": ("report", "output_path"),
        "title": ("report", "title"),
        "chart_script_url": ("report", "chart_script_url"),
        "browser": ("browser", "browser"),
        "headful": ("browser", "headless"),  # inverted
        "base_url": ("browser", "base_url"),
        "verbose": ("verbose", None),
    }

    for key, value in overrides.items():
        if value is None:
            continue

        if key == "headful":
            config_dict["browser"]["headless"] = not value
            continue

        mapping = override_mapping.get(key)
        if mapping:
            section, field = mapping
            if field is None:
                config_dict[section] = value
            else:
                config_dict[section][field] = value
