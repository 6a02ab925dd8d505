"""Helpers for loading project environment configuration."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .config import CONFIG_ENV_VAR


def load_env() -> None:
    """Load environment variables from .env files without overriding process env."""

    cwd = Path.cwd()

    base = find_dotenv(".env", usecwd=True)
    if base:
        load_dotenv(base, override=False)

    local_file = cwd / ".env.local"
    if local_file.exists():
        load_dotenv(local_file, override=False)

    if os.getenv("PYTEST_CURRENT_TEST"):
        test_file = cwd / ".env.test"
        if test_file.exists():
            load_dotenv(test_file, override=False)

    config_path = os.getenv(CONFIG_ENV_VAR)
    if config_path:
        normalized = Path(config_path).expanduser()
        try:
            normalized = normalized.resolve()
        except OSError:
            pass
        os.environ[CONFIG_ENV_VAR] = str(normalized)
