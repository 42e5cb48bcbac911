"""Unit tests for create_checker and the PolicyCheck it builds."""

import re

import pytest

from guardrails_policy.domain.constants import PolicyKind, PolicyScope
from guardrails_policy.domain.entities import PolicyMetadata
from guardrails_policy.domain.exceptions import ConfigurationError
from guardrails_policy.domain.rules import (
    compile_matcher,
    create_checker,
    file_filters,
    infer_layer,
    parse_metadata,
)
from guardrails_policy.policy.horizontal.server.domain_model import no_nested_child_arrays


def _noop(node, ctx) -> None:
    return None


class TestCreateChecker:
    def test_missing_file_pattern_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="file_pattern"):
            create_checker(visitor=_noop, policy_id="x/y", scope=PolicyScope.HORIZONTAL)

    def test_missing_visitor_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="visitor"):
            create_checker(file_pattern=r"\.ts$", policy_id="x/y", scope=PolicyScope.HORIZONTAL)

    def test_non_callable_visitor_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            create_checker(
                file_pattern=r"\.ts$", visitor="visit", policy_id="x/y", scope=PolicyScope.HORIZONTAL
            )

    def test_invalid_regex_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid file_pattern"):
            create_checker(file_pattern="([", visitor=_noop, policy_id="x/y", scope=PolicyScope.HORIZONTAL)

    def test_outside_the_catalog_an_id_is_required(self) -> None:
        with pytest.raises(ConfigurationError, match="cannot derive a policy id"):
            create_checker(file_pattern=r"\.ts$", visitor=_noop)

    def test_explicit_id_without_scope_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="explicit scope"):
            create_checker(file_pattern=r"\.ts$", visitor=_noop, policy_id="server/handler/x")

    def test_explicit_identity(self) -> None:
        check = create_checker(
            file_pattern=r"-handler\.ts$",
            visitor=_noop,
            policy_id="server/handler/custom-rule",
            scope=PolicyScope.HORIZONTAL,
            kind=PolicyKind.SEMANTIC,
            metadata=PolicyMetadata(what="Custom rule."),
        )
        assert check.id == "server/handler/custom-rule"
        assert check.workspace == "server"
        assert check.layer == "handler"
        assert check.kind is PolicyKind.SEMANTIC
        assert check.description == "Custom rule."

    def test_two_part_id_infers_layer(self) -> None:
        check = create_checker(
            file_pattern=r"\.ts$", visitor=_noop, policy_id="server/use-case-naming", scope="horizontal"
        )
        assert check.scope is PolicyScope.HORIZONTAL
        assert check.layer == "use-case"

    def test_identity_derived_from_catalog_module(self) -> None:
        check = no_nested_child_arrays.policy_check
        assert check.id == "server/domain-model/no-nested-child-arrays"
        assert check.scope is PolicyScope.HORIZONTAL
        assert check.kind is PolicyKind.STATIC
        assert check.workspace == "server"
        assert check.layer == "domain-model"
        assert check.metadata.what.startswith("Aggregates nest at most one level")
        assert check.metadata.why
        assert check.metadata.policy_path == (
            "policy/horizontal/server/domain_model/no_nested_child_arrays.py"
        )

    def test_description_falls_back_to_id(self) -> None:
        check = create_checker(
            file_pattern=r"\.ts$",
            visitor=_noop,
            policy_id="web/x",
            scope=PolicyScope.HORIZONTAL,
            metadata=PolicyMetadata(),
        )
        assert check.description == "web/x"


class TestMatching:
    def test_regex_string_pattern(self) -> None:
        matcher = compile_matcher(r"\.entity\.ts$")
        assert matcher("server/domain/model/todo/todo.entity.ts")
        assert not matcher("server/domain/model/todo/todo.vo.ts")

    def test_compiled_pattern_and_predicate(self) -> None:
        assert compile_matcher(re.compile(r"\.vo\.ts$"))("a/b.vo.ts")
        assert compile_matcher(lambda path: path.startswith("web/"))("web/x.ts")

    def test_unsupported_pattern_type(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_matcher(42)

    def test_empty_pattern(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_matcher("")

    def test_excludes_win_over_pattern(self) -> None:
        check = create_checker(
            file_pattern=r"\.ts$",
            visitor=_noop,
            policy_id="server/x",
            scope=PolicyScope.HORIZONTAL,
            exclude=file_filters.TEST_OR_DUMMY,
        )
        assert check.matches("server/a.ts")
        assert not check.matches("server/a.test.ts")
        assert not check.matches("server/a.dummy.ts")


class TestMetadata:
    def test_parse_metadata_reads_what_why_failure(self) -> None:
        metadata = parse_metadata(
            "Ports return Result.\n\nWhy: failures are values.\nFailure: a port returns a bare Promise.\n",
            "policy/x.py",
        )
        assert metadata.what == "Ports return Result."
        assert metadata.why == "failures are values."
        assert metadata.failure == "a port returns a bare Promise."
        assert metadata.policy_path == "policy/x.py"

    def test_parse_metadata_without_docstring(self) -> None:
        assert parse_metadata(None) == PolicyMetadata()

    def test_infer_layer(self) -> None:
        assert infer_layer("domain-model-props-type-alias") == "domain-model"
        assert infer_layer("handler-structure") == "handler"
        assert infer_layer("something-else") == "common"
