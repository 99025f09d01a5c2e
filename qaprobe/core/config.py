"""
Configuration module - centralized settings for the probing engine.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import Any, Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    List/dict fields are read as JSON, e.g.:
        export NAV_LINK_CAP=25
        export RESPONSIVE_VIEWPORTS='[{"name": "Mobile", "width": 360, "height": 640}]'
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "QA Probe"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # BROWSER SETTINGS
    # ---------------------------------------------------------------------------
    # Chromium runs headless; the sandbox flags mirror what CI containers need
    BROWSER_HEADLESS: bool = True
    BROWSER_ARGS: List[str] = ["--no-sandbox", "--disable-setuid-sandbox"]

    # ---------------------------------------------------------------------------
    # TIMEOUTS (milliseconds)
    # ---------------------------------------------------------------------------
    # Initial navigation for runSuite and monitorSignals respectively
    SUITE_TIMEOUT_MS: int = 10000
    MONITOR_TIMEOUT_MS: int = 30000

    # Per-step timeout for scripted flows when a step does not set one
    DEFAULT_STEP_TIMEOUT_MS: int = 5000

    # How long the JavaScript Errors Check waits for delayed page errors
    SCRIPT_ERROR_SETTLE_MS: int = 2000

    # ---------------------------------------------------------------------------
    # PROBE POLICIES
    # ---------------------------------------------------------------------------
    NAV_LINK_CAP: int = 10
    NAV_LINK_TIMEOUT_MS: int = 5000

    RESPONSIVE_VIEWPORTS: List[Dict[str, Any]] = [
        {"name": "Mobile", "width": 375, "height": 667},
        {"name": "Tablet", "width": 768, "height": 1024},
        {"name": "Desktop", "width": 1280, "height": 720},
    ]

    MIN_FONT_SIZE_PX: int = 12

    # ---------------------------------------------------------------------------
    # PERFORMANCE BUDGETS
    # ---------------------------------------------------------------------------
    LOAD_TIME_BUDGET_MS: int = 3000
    HEAP_BUDGET_MB: int = 50

    # ---------------------------------------------------------------------------
    # EVIDENCE
    # ---------------------------------------------------------------------------
    # Where "screenshot" flow steps write their captures
    EVIDENCE_DIR: str = "qa-evidence"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from qaprobe.core.config import settings
settings = Settings()
