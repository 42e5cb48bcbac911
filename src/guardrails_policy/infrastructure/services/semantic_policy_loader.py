"""SemanticPolicyLoader: reads semantic policy definitions from YAML."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from guardrails_policy.domain.exceptions import SemanticPolicyDefinitionError
from guardrails_policy.domain.rules import PolicyCheck
from guardrails_policy.domain.rules.semantic import build_semantic_check

logger = logging.getLogger(__name__)


class SemanticPolicyLoader:
    """Loads semantic_policies.yaml (packaged by default) and builds its checks."""

    def __init__(self, policy_file: Optional[str] = None) -> None:
        if policy_file is not None:
            self._path = Path(policy_file)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "semantic_policies.yaml"

    @property
    def path(self) -> Path:
        return self._path

    def load_definitions(self) -> list[dict[str, object]]:
        if not self._path.exists():
            logger.warning("Semantic policy file %s not found; no semantic policies loaded.", self._path)
            return []
        with open(self._path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise SemanticPolicyDefinitionError(f"{self._path}: {exc}") from exc
        if data is None:
            return []
        entries = data.get("policies") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise SemanticPolicyDefinitionError(f"{self._path}: expected a top-level 'policies' list")
        for entry in entries:
            if not isinstance(entry, dict):
                raise SemanticPolicyDefinitionError(f"{self._path}: every policy must be a mapping")
        return entries

    def load_checks(self) -> list[PolicyCheck]:
        return [build_semantic_check(entry, source=self._path.name) for entry in self.load_definitions()]
