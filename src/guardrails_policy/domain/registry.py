"""Policy registry: checks keyed by id, grouped by scope and kind."""

from typing import Iterable, Iterator, Optional, Sequence, Union

from guardrails_policy.domain.constants import PolicyKind, PolicyScope
from guardrails_policy.domain.entities import PolicyDescriptor
from guardrails_policy.domain.exceptions import DuplicatePolicyError, InvalidPolicyFilterError
from guardrails_policy.domain.rules import PolicyCheck


def _coerce_scope(scope: Union[PolicyScope, str]) -> PolicyScope:
    try:
        return PolicyScope(scope)
    except ValueError:
        raise InvalidPolicyFilterError("scope", scope, tuple(s.value for s in PolicyScope)) from None


def _coerce_kind(kind: Union[PolicyKind, str]) -> PolicyKind:
    try:
        return PolicyKind(kind)
    except ValueError:
        raise InvalidPolicyFilterError("type", kind, tuple(k.value for k in PolicyKind)) from None


class PolicyRegistry:
    """
    Catalog of PolicyChecks in registration order.

    Ids are unique within a scope; a duplicate raises at registration.
    The registry performs no I/O and is read-only once populated.
    """

    def __init__(self, checks: Iterable[PolicyCheck] = ()) -> None:
        self._checks: dict[tuple[PolicyScope, str], PolicyCheck] = {}
        for check in checks:
            self.register(check)

    def register(self, check: PolicyCheck) -> None:
        key = (check.scope, check.id)
        if key in self._checks:
            raise DuplicatePolicyError(check.id, check.scope.value)
        self._checks[key] = check

    def __len__(self) -> int:
        return len(self._checks)

    def __iter__(self) -> Iterator[PolicyCheck]:
        return iter(list(self._checks.values()))

    def get(self, policy_id: str, scope: Optional[Union[PolicyScope, str]] = None) -> Optional[PolicyCheck]:
        for check in self._checks.values():
            if check.id == policy_id and (scope is None or check.scope == _coerce_scope(scope)):
                return check
        return None

    def checks(
        self,
        scope: Optional[Union[PolicyScope, str]] = None,
        kind: Optional[Union[PolicyKind, str]] = None,
        workspace: Optional[str] = None,
        disabled: Sequence[str] = (),
    ) -> list[PolicyCheck]:
        """Executable checks matching the filters, in registration order."""
        wanted_scope = _coerce_scope(scope) if scope is not None else None
        wanted_kind = _coerce_kind(kind) if kind is not None else None
        skipped = set(disabled)
        return [
            check
            for check in self._checks.values()
            if (wanted_scope is None or check.scope == wanted_scope)
            and (wanted_kind is None or check.kind == wanted_kind)
            and (workspace is None or check.workspace == workspace)
            and check.id not in skipped
        ]

    def list_by_scope(self, scope: Union[PolicyScope, str]) -> list[PolicyDescriptor]:
        return [self.describe(check) for check in self.checks(scope=scope)]

    def list_by_kind(self, kind: Union[PolicyKind, str]) -> list[PolicyDescriptor]:
        return [self.describe(check) for check in self.checks(kind=kind)]

    def list_all(self) -> list[PolicyDescriptor]:
        return [self.describe(check) for check in self._checks.values()]

    @staticmethod
    def describe(check: PolicyCheck) -> PolicyDescriptor:
        return PolicyDescriptor(
            id=check.id,
            scope=check.scope,
            kind=check.kind,
            workspace=check.workspace,
            layer=check.layer,
            description=check.description,
            why=check.metadata.why,
            policy_path=check.metadata.policy_path,
        )
