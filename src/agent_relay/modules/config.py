"""Configuration helper to load the project .env and expose settings.

This module exposes a small ``Config`` class that loads ``config/.env``
via python-dotenv and provides a typed representation of the settings
the relay needs: logging, the tool-loop ceiling, the nested transfer
cap and the timeouts applied to model and tool calls. Values that are
already present in the process environment take precedence over the
.env file so tests and deployments can override them.
"""

from pathlib import Path
from dotenv import load_dotenv

import os
from typing import Optional

from agent_relay.constants import (
    ENV_PATH,
    DEFAULT_TOOL_TIMEOUT,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_COMPLETION_TIMEOUT,
    DEFAULT_MAX_TRANSFER_DEPTH,
)


class Config:
    """Environment-backed settings, optionally seeded from ``config/.env``."""

    def __init__(
        self,
        env_path: Path,
        log_enabled: bool,
        log_file: Path,
        verbose: bool = False,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_transfer_depth: int = DEFAULT_MAX_TRANSFER_DEPTH,
        completion_timeout: float = DEFAULT_COMPLETION_TIMEOUT,
        tool_timeout: float = DEFAULT_TOOL_TIMEOUT,
    ) -> None:
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
        if max_transfer_depth < 0:
            raise ValueError(f"max_transfer_depth must not be negative, got {max_transfer_depth}")

        self.env_path = env_path
        self.log_enabled = log_enabled
        self.log_file = log_file
        self.verbose = verbose
        self.max_iterations = max_iterations
        self.max_transfer_depth = max_transfer_depth
        self.completion_timeout = completion_timeout
        self.tool_timeout = tool_timeout

    @staticmethod
    def _env_bool(name: str, default: str = "false") -> bool:
        """Parse a boolean-ish environment variable value.

        Recognizes 1/true/yes/on (case-insensitive) as truthy values.
        """
        return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}

    @staticmethod
    def _env_int(name: str, default: int) -> int:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError as e:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from e

    @staticmethod
    def _env_float(name: str, default: float) -> float:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError as e:
            raise ValueError(f"{name} must be a number, got {raw!r}") from e

    @classmethod
    def load(cls, env_path: Optional[Path] = None) -> "Config":
        """Load and return a Config instance.

        The .env file is optional: when it is missing the settings come
        from the process environment alone. The loader uses
        ``load_dotenv(..., override=False)`` so that existing environment
        variables keep precedence.
        """
        env_path = Path(env_path) if env_path is not None else ENV_PATH
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=False)

        return cls(
            env_path=env_path,
            log_enabled=cls._env_bool("LOG_ENABLED", "false"),
            log_file=Path(os.getenv("LOG_FILE", "logs/log.txt").strip()),
            verbose=cls._env_bool("VERBOSE", "false"),
            max_iterations=cls._env_int("MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS),
            max_transfer_depth=cls._env_int("MAX_TRANSFER_DEPTH", DEFAULT_MAX_TRANSFER_DEPTH),
            completion_timeout=cls._env_float("COMPLETION_TIMEOUT", DEFAULT_COMPLETION_TIMEOUT),
            tool_timeout=cls._env_float("TOOL_TIMEOUT", DEFAULT_TOOL_TIMEOUT),
        )
