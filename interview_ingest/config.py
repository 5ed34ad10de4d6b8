# Interview Analysis
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

This module handles reading `ingest.yaml`, validating its keys, and turning it
into a typed config object. The parsing core never reads configuration itself;
the actions pass the relevant values (speech rate, gap handling, column
overrides) explicitly.
"""

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

import yaml

from interview_ingest.columns import TRANSCRIPT_HEADERS
from interview_ingest.timing import DEFAULT_SPEECH_RATE


CONFIG_FILENAME = "ingest.yaml"
CONFIG_ENV_VAR = "INTERVIEW_INGEST_CONFIG"


@dataclass(frozen=True)
class TimingConfig:
    """
    Settings for timing inference.

    Attributes:
        speech_rate_words_per_second:
            Speech rate used to estimate turn durations when no end time is
            known.
        preserve_gaps_between_turns:
            For `startOnly` transcripts: if True, turns end after their
            estimated duration instead of at the next turn's start.
    """

    speech_rate_words_per_second: float = DEFAULT_SPEECH_RATE
    preserve_gaps_between_turns: bool = False


@dataclass(frozen=True)
class IngestConfig:
    """
    Parsed configuration.

    Attributes:
        config_path:
            Path of the YAML file, or None if defaults are used.
        timing:
            Timing inference settings.
        column_overrides:
            Manual transcript column mapping (`canonical -> source header`). A
            value of None deliberately leaves the canonical header unmapped.
    """

    config_path: Path | None = None
    timing: TimingConfig = field(default_factory=TimingConfig)
    column_overrides: dict[str, str | None] = field(default_factory=dict)


class ConfigError(RuntimeError):
    """
    Raised when the configuration or the command line input is invalid.
    """

    pass


def find_config_path(cli_path: str | None) -> tuple[Path, bool]:
    """
    Determine which YAML config file to use.

    Args:
        cli_path:
            Optional config path provided on the command line.

    Returns:
        The path (not necessarily existing) and whether it was requested
        explicitly (command line or environment) rather than defaulted.
    """

    if cli_path:
        return Path(cli_path), True

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return Path.cwd() / CONFIG_FILENAME, False


def load_config(path: Path, *, required: bool = True) -> IngestConfig:
    """
    Load and validate an `ingest.yaml` configuration file.

    Args:
        path:
            Path to the YAML config file.
        required:
            If False, a missing file yields the default configuration.

    Returns:
        A validated IngestConfig instance.

    Raises:
        ConfigError:
            If the file is missing (and required), unreadable, cannot be parsed
            as YAML, or contains invalid values.
    """

    if not path.exists():
        if not required:
            return IngestConfig()
        raise ConfigError(
            f"Config file not found: {path}. "
            "Use the 'template' command to create one or omit --config."
        )
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    unknown = sorted(str(k) for k in raw if k not in {"timing", "columns"})
    if unknown:
        raise ConfigError(f"Config contains unknown key(s): {', '.join(unknown)}")

    return IngestConfig(
        config_path=path.resolve(),
        timing=_parse_timing(raw.get("timing")),
        column_overrides=_parse_columns(raw.get("columns")),
    )


def _parse_timing(value: Any) -> TimingConfig:
    """
    Parse and validate the optional `timing` section.

    Args:
        value:
            Raw YAML value for the `timing` key.

    Returns:
        A TimingConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return TimingConfig()

    if not isinstance(value, dict):
        raise ConfigError("'timing' must be a mapping if provided")

    speech_rate = value.get("speech_rate_words_per_second", TimingConfig.speech_rate_words_per_second)
    preserve_gaps = value.get("preserve_gaps_between_turns", TimingConfig.preserve_gaps_between_turns)

    if isinstance(speech_rate, bool) or not isinstance(speech_rate, (int, float)):
        raise ConfigError("timing.speech_rate_words_per_second must be a number")
    if speech_rate <= 0:
        raise ConfigError("timing.speech_rate_words_per_second must be > 0")
    if not isinstance(preserve_gaps, bool):
        raise ConfigError("timing.preserve_gaps_between_turns must be a boolean")

    return TimingConfig(
        speech_rate_words_per_second=float(speech_rate),
        preserve_gaps_between_turns=preserve_gaps,
    )


def _parse_columns(value: Any) -> dict[str, str | None]:
    """Parse the optional `columns` section (manual column overrides)."""

    if value is None:
        return {}

    if not isinstance(value, dict):
        raise ConfigError("'columns' must be a mapping if provided")

    overrides: dict[str, str | None] = {}
    for key, source in value.items():
        if key not in TRANSCRIPT_HEADERS:
            raise ConfigError(
                f"columns.{key} is not a transcript column (expected one of: {', '.join(TRANSCRIPT_HEADERS)})"
            )
        if source is None:
            overrides[key] = None
            continue
        if not isinstance(source, str) or not source.strip():
            raise ConfigError(f"columns.{key} must be a non-empty string or null")
        overrides[key] = source.strip().lower()

    return overrides
