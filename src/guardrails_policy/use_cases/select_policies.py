"""Select the policy documents that apply to one target file."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from guardrails_policy.domain.entities import PolicySelection
from guardrails_policy.domain.exceptions import (
    PolicyDocumentNotFoundError,
    UnsupportedFileFormatError,
)
from guardrails_policy.domain.protocols import FileSystemProtocol


@dataclass(frozen=True)
class SelectionRule:
    """A file-name category and the documents reviewed for it, overview first."""

    category: str
    matches: Callable[[str], bool]
    documents: tuple[str, ...]


@dataclass(frozen=True)
class SelectorVariant:
    name: str
    policy_dir: str
    rules: tuple[SelectionRule, ...]
    rejects: tuple[str, ...] = ()


def _ends_with(*suffixes: str) -> Callable[[str], bool]:
    return lambda name: name.endswith(suffixes)


WEB_TEST_STRATEGY = SelectorVariant(
    name="web-test-strategy",
    policy_dir="policy/web/test-strategy",
    rules=(
        SelectionRule(
            category="component-test",
            matches=_ends_with(".ct.test.tsx"),
            documents=("10-test-strategy-overview.md", "20-component-test.md"),
        ),
        SelectionRule(
            category="snapshot-test",
            matches=_ends_with(".ss.test.ts"),
            documents=("10-test-strategy-overview.md", "30-snapshot-test.md"),
        ),
    ),
)

SERVER_DOMAIN_MODEL = SelectorVariant(
    name="server-domain-model",
    policy_dir="policy/server/domain-model",
    rejects=(".small.test.ts", ".medium.test.ts", ".dummy.ts"),
    rules=(
        SelectionRule(
            category="repository",
            matches=lambda name: name.endswith(".ts") and "repository" in name,
            documents=(
                "10-domain-model-overview.md",
                "30-repository-interface.md",
                "40-aggregate-pattern.md",
            ),
        ),
        SelectionRule(
            category="entity",
            matches=_ends_with(".ts"),
            documents=(
                "10-domain-model-overview.md",
                "20-entity-design.md",
                "40-aggregate-pattern.md",
            ),
        ),
    ),
)

SELECTORS: dict[str, SelectorVariant] = {
    variant.name: variant for variant in (WEB_TEST_STRATEGY, SERVER_DOMAIN_MODEL)
}

DEFAULT_POLICY_ROOT = Path(__file__).resolve().parent.parent / "resources"


class PolicySelector:
    """
    Maps a target file to its ordered policy documents.

    Unrecognised files raise UnsupportedFileFormatError; a selected document
    missing under the policy root raises PolicyDocumentNotFoundError.
    """

    def __init__(self, variant: SelectorVariant, filesystem: FileSystemProtocol) -> None:
        self.variant = variant
        self._filesystem = filesystem

    def categorize(self, file_name: str) -> Optional[SelectionRule]:
        if file_name.endswith(self.variant.rejects):
            return None
        for rule in self.variant.rules:
            if rule.matches(file_name):
                return rule
        return None

    async def select_policies(
        self, target_file_path: str, policy_root: Union[str, Path, None] = None
    ) -> PolicySelection:
        file_name = Path(target_file_path).name
        rule = self.categorize(file_name)
        if rule is None:
            raise UnsupportedFileFormatError(file_name)

        root = Path(policy_root) if policy_root is not None else DEFAULT_POLICY_ROOT
        base = root / self.variant.policy_dir
        documents = tuple(base / name for name in rule.documents)
        found = await asyncio.gather(
            *(asyncio.to_thread(self._filesystem.exists, str(path)) for path in documents)
        )
        for path, exists in zip(documents, found):
            if not exists:
                raise PolicyDocumentNotFoundError(str(path))
        return PolicySelection(
            target_file_path=target_file_path,
            policy_root=root,
            category=rule.category,
            documents=documents,
        )
