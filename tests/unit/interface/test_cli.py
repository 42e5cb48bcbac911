"""Tests for the Typer CLI with injected dependencies."""

import json
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from guardrails_policy.domain.config import ConfigurationLoader
from guardrails_policy.domain.constants import PolicyScope, Severity
from guardrails_policy.domain.engine import TraversalEngine
from guardrails_policy.domain.exceptions import SemanticPolicyDefinitionError
from guardrails_policy.domain.registry import PolicyRegistry
from guardrails_policy.domain.rules import create_checker
from guardrails_policy.infrastructure.gateways.astroid_gateway import AstroidGateway
from guardrails_policy.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from guardrails_policy.infrastructure.gateways.source_gateway import SourceGateway
from guardrails_policy.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from guardrails_policy.infrastructure.reporters import JsonReporter, MarkdownReporter, TextReporter
from guardrails_policy.infrastructure.services.policy_document_loader import PolicyDocumentLoader
from guardrails_policy.interface.cli import CLIAppFactory, CLIDependencies
from guardrails_policy.policy import CATALOG, build_default_registry

runner = CliRunner()

BAD_HANDLER = "export const createTodoHandler = () => async (c) => c.json({}, 201);\n"


def cli_required_deps(**overrides) -> CLIDependencies:
    """CLIDependencies wired with real gateways and a mock telemetry port."""
    filesystem = FileSystemGateway()
    values = {
        "config_loader": ConfigurationLoader({}, {}),
        "telemetry": MagicMock(),
        "registry_provider": build_default_registry,
        "parser": SourceGateway([TreeSitterGateway(), AstroidGateway()]),
        "filesystem": filesystem,
        "engine": TraversalEngine(),
        "document_loader": PolicyDocumentLoader(filesystem),
        "reporters": {"text": TextReporter(), "markdown": MarkdownReporter(), "json": JsonReporter()},
    }
    values.update(overrides)
    return CLIDependencies(**values)


def _invoke(args, **overrides):
    deps = cli_required_deps(**overrides)
    return runner.invoke(CLIAppFactory.create_app(deps), args), deps


def _warning_registry() -> PolicyRegistry:
    def visit(node, ctx):
        if node.kind == "program":
            ctx.report(node, "soft finding", Severity.WARNING)

    return PolicyRegistry(
        [
            create_checker(
                file_pattern=r"\.ts$",
                visitor=visit,
                policy_id="server/common/soft",
                scope=PolicyScope.HORIZONTAL,
            )
        ]
    )


@pytest.fixture
def handler_dir(tmp_path):
    target = tmp_path / "server" / "src" / "handler" / "hono-handler" / "todo"
    target.mkdir(parents=True)
    (target / "create-todo-handler.ts").write_text(BAD_HANDLER, encoding="utf-8")
    return tmp_path


def test_resolve_paths_defaults_to_cwd() -> None:
    assert CLIAppFactory.resolve_paths(None) == ["."]
    assert CLIAppFactory.resolve_paths([]) == ["."]


class TestCheckCommand:
    def test_clean_tree_exits_zero(self, tmp_path) -> None:
        (tmp_path / "util.ts").write_text("export const one = 1;\n", encoding="utf-8")
        result, deps = _invoke(["check", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "1 file(s) checked: 0 error(s)" in result.stdout
        deps.telemetry.handshake.assert_called_once()

    def test_violations_exit_one(self, handler_dir) -> None:
        result, _ = _invoke(["check", str(handler_dir)])
        assert result.exit_code == 1
        assert "[server/handler/handler-naming]" in result.stdout

    def test_json_format(self, handler_dir) -> None:
        result, _ = _invoke(["check", str(handler_dir), "--format", "json"])
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["errorCount"] >= 1

    def test_unknown_format_exits_two(self, tmp_path) -> None:
        result, deps = _invoke(["check", str(tmp_path), "--format", "xml"])
        assert result.exit_code == 2
        deps.telemetry.error.assert_called_once()

    def test_bad_scope_exits_two(self, tmp_path) -> None:
        result, _ = _invoke(["check", str(tmp_path), "--scope", "diagonal"])
        assert result.exit_code == 2

    def test_broken_semantic_policies_exit_two(self, tmp_path) -> None:
        def broken_registry() -> PolicyRegistry:
            raise SemanticPolicyDefinitionError("semantic_policies.yaml: bad entry")

        result, deps = _invoke(["check", str(tmp_path)], registry_provider=broken_registry)
        assert result.exit_code == 2
        deps.telemetry.error.assert_called_once_with("semantic_policies.yaml: bad entry")

    def test_warnings_fail_only_on_request(self, tmp_path) -> None:
        (tmp_path / "a.ts").write_text("export {};\n", encoding="utf-8")

        result, _ = _invoke(["check", str(tmp_path)], registry_provider=_warning_registry)
        assert result.exit_code == 0
        assert "1 warning(s)" in result.stdout

        result, _ = _invoke(["check", str(tmp_path), "--fail-on-warnings"], registry_provider=_warning_registry)
        assert result.exit_code == 1

        result, _ = _invoke(
            ["check", str(tmp_path)],
            registry_provider=_warning_registry,
            config_loader=ConfigurationLoader({"fail_on_warnings": True}, {}),
        )
        assert result.exit_code == 1


class TestListingCommands:
    def test_list_policies_json(self) -> None:
        result, _ = _invoke(["list-policies", "--format", "json"])
        assert result.exit_code == 0
        assert [item["id"] for item in json.loads(result.stdout)] == [check.id for check in CATALOG]

    def test_list_policies_markdown_groups_by_workspace(self) -> None:
        result, _ = _invoke(["list-policies", "--scope", "horizontal"])
        assert result.exit_code == 0
        assert "## server" in result.stdout
        assert "## web" in result.stdout
        assert "openapi-router-consistency" not in result.stdout

    def test_list_policies_bad_type(self) -> None:
        result, _ = _invoke(["list-policies", "--type", "dynamic"])
        assert result.exit_code == 2

    def test_tools_describe(self) -> None:
        result, _ = _invoke(["tools"])
        assert result.exit_code == 0
        assert [item["id"] for item in json.loads(result.stdout)] == [
            "list_horizontal_policies",
            "list_vertical_policies",
        ]

    def test_tools_call(self) -> None:
        result, _ = _invoke(["tools", "--call", "list_vertical_policies"])
        assert result.exit_code == 0
        assert [item["id"] for item in json.loads(result.stdout)] == [
            "server/contract-implementation/openapi-router-consistency"
        ]

    def test_tools_unknown_call(self) -> None:
        result, _ = _invoke(["tools", "--call", "list_everything"])
        assert result.exit_code == 2


class TestSelectionCommands:
    def test_select_prints_documents_in_order(self) -> None:
        result, _ = _invoke(["select", "server/src/domain/model/todo/todo.repository.ts"])
        assert result.exit_code == 0
        names = [line.rsplit("/", 1)[-1] for line in result.stdout.splitlines()]
        assert names == ["10-domain-model-overview.md", "30-repository-interface.md", "40-aggregate-pattern.md"]

    def test_select_web_variant(self) -> None:
        result, _ = _invoke(["select", "foo.ct.test.tsx", "--selector", "web-test-strategy"])
        assert result.exit_code == 0
        assert result.stdout.splitlines()[-1].endswith("20-component-test.md")

    def test_select_unsupported_file_exits_one(self) -> None:
        result, deps = _invoke(["select", "foo.unknown.tsx"])
        assert result.exit_code == 1
        assert "foo.unknown.tsx" in deps.telemetry.error.call_args[0][0]

    def test_select_unknown_selector_exits_two(self) -> None:
        result, _ = _invoke(["select", "todo.entity.ts", "--selector", "nope"])
        assert result.exit_code == 2

    def test_review_prints_instruction(self, tmp_path) -> None:
        target = tmp_path / "todo.entity.ts"
        target.write_text("export class Todo {}\n", encoding="utf-8")
        result, _ = _invoke(["review", str(target)])
        assert result.exit_code == 0
        assert "## Policy 1: 10-domain-model-overview.md" in result.stdout
        assert f"## Target file: {target}" in result.stdout

    def test_review_missing_target_exits_one(self, tmp_path) -> None:
        result, deps = _invoke(["review", str(tmp_path / "absent.entity.ts")])
        assert result.exit_code == 1
        assert "cannot read" in deps.telemetry.error.call_args[0][0]

    def test_review_undecodable_target_exits_one(self, tmp_path) -> None:
        target = tmp_path / "todo.entity.ts"
        target.write_bytes(b"export const name = '\xff\xfe';\n")
        result, deps = _invoke(["review", str(target)])
        assert result.exit_code == 1
        assert "cannot read" in deps.telemetry.error.call_args[0][0]
