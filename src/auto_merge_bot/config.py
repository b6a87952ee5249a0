"""Configuration loading.

Settings live in a YAML file, by default ``.github/auto-merge.yml``::

    mergeTimeout:
      collaborator: "3.5 days"
      contributor: "7 days"
    approvalsRequired:
      collaborator: 1
      contributor: 2
    watch:
      monitor: ["my-org/my-repo"]
      ignore: []

Missing keys fall back to the defaults above (with an empty monitor list).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .utils.durations import parse_duration

DEFAULT_CONFIG_PATH = Path(".github/auto-merge.yml")
DEFAULT_WORKFLOW_NAME = "auto-merge"
DEFAULT_DB_PATH = "auto-merge.db"


@dataclass(frozen=True)
class MergeTimeout:
    """Inactivity period before a pull request may be merged."""

    collaborator: str = "3.5 days"
    contributor: str = "7 days"


@dataclass(frozen=True)
class ApprovalsRequired:
    """Number of approving reviews needed before merging."""

    collaborator: int = 1
    contributor: int = 2


@dataclass(frozen=True)
class WatchSettings:
    """Organizations or repositories to monitor and to ignore."""

    monitor: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()


@dataclass(frozen=True)
class AutoMergeConfig:
    """Top-level auto-merge settings."""

    merge_timeout: MergeTimeout = field(default_factory=MergeTimeout)
    approvals_required: ApprovalsRequired = field(default_factory=ApprovalsRequired)
    watch: WatchSettings = field(default_factory=WatchSettings)

    def validate(self) -> None:
        """Check durations and approval counts.

        Raises
        ------
        ValueError
            If a duration cannot be parsed or an approval count is negative.

        """
        for name in ("collaborator", "contributor"):
            parse_duration(getattr(self.merge_timeout, name))
            count = getattr(self.approvals_required, name)
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ValueError(
                    f"approvalsRequired.{name} must be a non-negative integer, got {count!r}"
                )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AutoMergeConfig":
        """Build a validated config from parsed YAML.

        Raises
        ------
        ValueError
            If the data is malformed.

        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")

        timeout = _section(data, "mergeTimeout")
        approvals = _section(data, "approvalsRequired")
        watch = _section(data, "watch")

        defaults_timeout = MergeTimeout()
        defaults_approvals = ApprovalsRequired()
        config = cls(
            merge_timeout=MergeTimeout(
                collaborator=str(timeout.get("collaborator", defaults_timeout.collaborator)),
                contributor=str(timeout.get("contributor", defaults_timeout.contributor)),
            ),
            approvals_required=ApprovalsRequired(
                collaborator=approvals.get("collaborator", defaults_approvals.collaborator),
                contributor=approvals.get("contributor", defaults_approvals.contributor),
            ),
            watch=WatchSettings(
                monitor=_string_list(watch, "monitor"),
                ignore=_string_list(watch, "ignore"),
            ),
        )
        config.validate()
        return config


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be a mapping")
    return value


def _string_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key) or []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ValueError(f"'watch.{key}' must be a list of strings")
    return tuple(str(item).strip() for item in value if str(item).strip())


def load_config(path: str | Path | None = None) -> AutoMergeConfig:
    """Load configuration from a YAML file.

    Parameters
    ----------
    path : str, Path or None, optional
        Config file. If None, DEFAULT_CONFIG_PATH is used when it exists and
        built-in defaults otherwise.

    Returns
    -------
    AutoMergeConfig
        Validated configuration.

    Raises
    ------
    FileNotFoundError
        If an explicitly given path does not exist.
    ValueError
        If the configuration is invalid.
    yaml.YAMLError
        If the file is not valid YAML.

    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return AutoMergeConfig()
        path = DEFAULT_CONFIG_PATH

    with open(path, "r") as f:
        data = yaml.safe_load(f)
    return AutoMergeConfig.from_dict(data)
