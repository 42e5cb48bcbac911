"""Compiled-in policy catalog.

Each module under policy/<scope>/<workspace>/<layer>/ exports `policy_check`.
CATALOG order is registration order, which is also diagnostic order for
checks reporting on the same node.
"""

from typing import Iterable

from guardrails_policy.domain.registry import PolicyRegistry
from guardrails_policy.domain.rules import PolicyCheck
from guardrails_policy.policy.horizontal.server.di_container import (
    service_id_naming,
    singleton_scope_required,
)
from guardrails_policy.policy.horizontal.server.domain_model import (
    domain_method_naming,
    from_factory_method,
    no_logger,
    no_nested_child_arrays,
    no_optional_constructor_params,
    no_parent_id_in_child,
    repository_result_types,
    repository_type_alias,
    vo_equals_method,
)
from guardrails_policy.policy.horizontal.server.handler import (
    error_handling_pattern,
    handler_naming,
    no_repository_access,
    try_catch_required,
)
from guardrails_policy.policy.horizontal.server.logger import no_domain_logging
from guardrails_policy.policy.horizontal.server.port import result_type_return
from guardrails_policy.policy.horizontal.server.use_case import (
    entity_from_pattern,
    no_before_each_in_tests,
    no_nullish_coalescing_in_patch,
    no_private_methods,
    result_return_type,
    result_type_guard,
    use_case_naming,
)
from guardrails_policy.policy.horizontal.web.logger import no_ui_logging
from guardrails_policy.policy.vertical.server.contract_implementation import (
    openapi_router_consistency,
)

CATALOG: tuple[PolicyCheck, ...] = (
    # server / di-container
    service_id_naming.policy_check,
    singleton_scope_required.policy_check,
    # server / domain-model
    no_nested_child_arrays.policy_check,
    no_parent_id_in_child.policy_check,
    domain_method_naming.policy_check,
    no_optional_constructor_params.policy_check,
    from_factory_method.policy_check,
    vo_equals_method.policy_check,
    repository_type_alias.policy_check,
    repository_result_types.policy_check,
    no_logger.policy_check,
    # server / handler
    error_handling_pattern.policy_check,
    try_catch_required.policy_check,
    handler_naming.policy_check,
    no_repository_access.policy_check,
    # server / logger
    no_domain_logging.policy_check,
    # server / port
    result_type_return.policy_check,
    # server / use-case
    result_return_type.policy_check,
    no_private_methods.policy_check,
    entity_from_pattern.policy_check,
    no_nullish_coalescing_in_patch.policy_check,
    result_type_guard.policy_check,
    use_case_naming.policy_check,
    no_before_each_in_tests.policy_check,
    # web / logger
    no_ui_logging.policy_check,
    # vertical
    openapi_router_consistency.policy_check,
)


def build_default_registry(extra_checks: Iterable[PolicyCheck] = ()) -> PolicyRegistry:
    """Registry of the compiled-in catalog followed by `extra_checks` (semantic policies)."""
    registry = PolicyRegistry(CATALOG)
    for check in extra_checks:
        registry.register(check)
    return registry
