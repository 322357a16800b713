"""Environment-driven settings for the CLI and demo app.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory:

- ``SIMPLE_BAYES_MODEL``: path of the JSON model file
- ``SIMPLE_BAYES_DEFAULT_PROB``: probability assumed for unseen terms
- ``SIMPLE_BAYES_TIE_BREAK``: ``last`` or ``first``
- ``SIMPLE_BAYES_LOG_LEVEL``: logging level name
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .bayes import DEFAULT_PROB, TieBreak
from .errors import InvalidConfigurationError

DEFAULT_MODEL_PATH = "simple_bayes_model.json"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    model_path: Path = Path(DEFAULT_MODEL_PATH)
    default_prob: float = DEFAULT_PROB
    tie_break: TieBreak = TieBreak.LAST
    log_level: str = "WARNING"

    def to_dict(self) -> dict:
        return {
            "model_path": str(self.model_path),
            "default_prob": self.default_prob,
            "tie_break": self.tie_break.value,
            "log_level": self.log_level,
        }


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Load settings from the environment (after reading ``.env``).

    Without ``env_file`` the nearest ``.env`` at or above the working
    directory is used. Variables already set in the environment take
    precedence over the file.

    Raises:
        InvalidConfigurationError: If a variable holds an unusable value.
    """
    load_dotenv(env_file if env_file is not None else find_dotenv(usecwd=True))

    model_path = Path(os.getenv("SIMPLE_BAYES_MODEL", DEFAULT_MODEL_PATH))

    raw_prob = os.getenv("SIMPLE_BAYES_DEFAULT_PROB")
    if raw_prob is None:
        default_prob = DEFAULT_PROB
    else:
        try:
            default_prob = float(raw_prob)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"SIMPLE_BAYES_DEFAULT_PROB must be a number, got {raw_prob!r}"
            ) from exc
        if not 0 < default_prob <= 1:
            raise InvalidConfigurationError(
                f"SIMPLE_BAYES_DEFAULT_PROB must be in (0, 1], got {default_prob}"
            )

    tie_break = TieBreak.parse(os.getenv("SIMPLE_BAYES_TIE_BREAK", TieBreak.LAST.value))

    log_level = os.getenv("SIMPLE_BAYES_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise InvalidConfigurationError(f"Unknown log level: {log_level!r}")

    return Settings(
        model_path=model_path,
        default_prob=default_prob,
        tie_break=tie_break,
        log_level=log_level,
    )
