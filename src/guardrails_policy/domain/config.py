"""Configuration for guardrails runs. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging
from typing import Optional

from guardrails_policy.domain.constants import DEFAULT_EXCLUDE_DIRS, MAX_OUTPUT_CHARS


class ConfigurationLoader:
    """
    Immutable configuration read from [tool.guardrails].

    Created by Infrastructure from (config_dict, tool_section). Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, tool_section) at composition root.
    Invalid values are logged and replaced by defaults.
    """

    def __init__(
        self,
        config_dict: dict[str, object],
        tool_section: dict[str, object],
    ) -> None:
        self._config = config_dict
        self._tool_section = tool_section
        if config_dict:
            self.validate_config(config_dict)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about values that will be ignored."""
        known = {
            "exclude_dirs",
            "disabled_policies",
            "jobs",
            "time_budget_seconds",
            "max_output_chars",
            "fail_on_warnings",
            "policy_root",
            "semantic_policies",
        }
        for key in sorted(set(config) - known):
            logging.warning("Configuration Warning: unknown [tool.guardrails] key '%s' ignored.", key)
        jobs = config.get("jobs")
        if jobs is not None and (not isinstance(jobs, int) or isinstance(jobs, bool) or jobs < 1):
            logging.warning("Configuration Warning: 'jobs' must be a positive integer; using 1.")

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def exclude_dirs(self) -> list[str]:
        """Directory names never descended into when collecting files."""
        raw = self._config.get("exclude_dirs")
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return list(DEFAULT_EXCLUDE_DIRS)

    @property
    def disabled_policies(self) -> list[str]:
        raw = self._config.get("disabled_policies", [])
        return [str(x) for x in raw] if isinstance(raw, list) else []

    @property
    def jobs(self) -> int:
        raw = self._config.get("jobs", 1)
        if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 1:
            return raw
        return 1

    @property
    def time_budget_seconds(self) -> Optional[float]:
        raw = self._config.get("time_budget_seconds")
        if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw > 0:
            return float(raw)
        return None

    @property
    def max_output_chars(self) -> int:
        raw = self._config.get("max_output_chars", MAX_OUTPUT_CHARS)
        if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
            return raw
        return MAX_OUTPUT_CHARS

    @property
    def fail_on_warnings(self) -> bool:
        return self._config.get("fail_on_warnings") is True

    @property
    def policy_root(self) -> Optional[str]:
        """Directory holding policy/<workspace>/<topic>/*.md; None means the packaged documents."""
        raw = self._config.get("policy_root")
        return raw if isinstance(raw, str) and raw else None

    @property
    def semantic_policies(self) -> Optional[str]:
        """Path of an extra semantic policy YAML file."""
        raw = self._config.get("semantic_policies")
        return raw if isinstance(raw, str) and raw else None
