"""Unit tests for the text, markdown and JSON reporters."""

import json

from guardrails_policy.domain.constants import PolicyKind, PolicyScope, Severity
from guardrails_policy.domain.entities import (
    AnalysisRun,
    Diagnostic,
    FileReport,
    PolicyDescriptor,
    ToolingError,
)
from guardrails_policy.infrastructure.reporters import (
    JsonReporter,
    MarkdownReporter,
    TextReporter,
    group_by_workspace,
    truncate_output,
)


def _diagnostic(path: str, severity: Severity = Severity.ERROR) -> Diagnostic:
    return Diagnostic(
        file_path=path,
        line=2,
        column=1,
        end_line=2,
        end_column=10,
        message="first line\nBad: x\nGood: y",
        severity=severity,
        policy_id="server/handler/handler-naming",
        what="Handlers are named build<Action><Entity>Handler.",
        why="predictable names",
        policy_path="policy/horizontal/server/handler/handler_naming.py",
    )


def _run() -> AnalysisRun:
    return AnalysisRun(
        reports=(
            FileReport("a-handler.ts", diagnostics=(_diagnostic("a-handler.ts"),)),
            FileReport("b-handler.ts", diagnostics=(_diagnostic("b-handler.ts", Severity.WARNING),)),
            FileReport("c.py", tooling_errors=(ToolingError("c.py", "failed to parse c.py: bad"),)),
        )
    )


def _descriptor(policy_id: str, workspace: str, layer: str) -> PolicyDescriptor:
    return PolicyDescriptor(
        id=policy_id,
        scope=PolicyScope.HORIZONTAL,
        kind=PolicyKind.STATIC,
        workspace=workspace,
        layer=layer,
        description=f"describe {policy_id}",
    )


class TestTruncateOutput:
    def test_short_output_is_unchanged(self) -> None:
        assert truncate_output("abc", max_chars=10) == "abc"

    def test_keeps_head_and_tail(self) -> None:
        lines = [f"line {i:04d}" for i in range(2000)]
        output = "\n".join(lines)

        result = truncate_output(output, max_chars=1000)

        assert "chars omitted) ..." in result
        assert result.startswith("line 0000")
        assert result.endswith("line 1999")
        assert len(result) < 1100

    def test_tail_gets_most_of_the_budget(self) -> None:
        output = "\n".join(f"{i:05d}" for i in range(5000))
        head, tail = truncate_output(output, max_chars=1200).split("chars omitted) ...")
        assert len(tail) > 4 * len(head)


class TestGroupByWorkspace:
    def test_groups_in_first_seen_order(self) -> None:
        descriptors = [
            _descriptor("server/handler/a", "server", "handler"),
            _descriptor("web/logger/b", "web", "logger"),
            _descriptor("server/port/c", "server", "port"),
            _descriptor("server/handler/d", "server", "handler"),
        ]
        grouped = group_by_workspace(descriptors)
        assert list(grouped) == ["server", "web"]
        assert list(grouped["server"]) == ["handler", "port"]
        assert [d.id for d in grouped["server"]["handler"]] == ["server/handler/a", "server/handler/d"]


class TestTextReporter:
    def test_render_run(self) -> None:
        lines = TextReporter().render_run(_run()).splitlines()
        assert lines[0] == "a-handler.ts:2:1: error [server/handler/handler-naming] first line"
        assert lines[1].startswith("b-handler.ts:2:1: warning")
        assert lines[2] == "c.py:0:0: tooling-error [-] failed to parse c.py: bad"
        assert lines[3] == "3 file(s) checked: 1 error(s), 1 warning(s), 1 tooling error(s)"

    def test_render_policies(self) -> None:
        text = TextReporter().render_policies([_descriptor("server/handler/a", "server", "handler")])
        assert text == "server/handler/a\tstatic\tdescribe server/handler/a"


class TestMarkdownReporter:
    def test_summary_is_last(self) -> None:
        output = MarkdownReporter().render_run(_run())
        assert output.index("## Violations") < output.index("## Tooling errors") < output.index("## Summary")
        assert "### a-handler.ts" in output
        assert "  - Why: predictable names" in output
        assert "  Bad: x" in output
        assert "- **Status**: FAILED" in output
        assert output.rstrip().endswith("- Tooling errors: 1")

    def test_clean_run_passes(self) -> None:
        output = MarkdownReporter().render_run(AnalysisRun(reports=(FileReport("a.ts"),)))
        assert "## Violations" not in output
        assert "- **Status**: PASSED" in output

    def test_long_reports_are_truncated(self) -> None:
        reports = tuple(
            FileReport(f"f{i}-handler.ts", diagnostics=(_diagnostic(f"f{i}-handler.ts"),)) for i in range(200)
        )
        output = MarkdownReporter(max_chars=2000).render_run(AnalysisRun(reports=reports))
        assert "chars omitted" in output
        assert output.rstrip().endswith("- Tooling errors: 0")

    def test_render_policies_grouped(self) -> None:
        output = MarkdownReporter().render_policies(
            [
                _descriptor("server/handler/a", "server", "handler"),
                _descriptor("web/logger/b", "web", "logger"),
            ]
        )
        assert output.index("## server") < output.index("### handler") < output.index("## web")
        assert "- `web/logger/b` (static): describe web/logger/b" in output

    def test_render_no_policies(self) -> None:
        assert "No policies match the filter." in MarkdownReporter().render_policies([])


class TestJsonReporter:
    def test_render_run(self) -> None:
        payload = json.loads(JsonReporter().render_run(_run()))
        assert payload["success"] is False
        assert payload["filesChecked"] == 3
        assert payload["errorCount"] == 1
        assert payload["warningCount"] == 1
        assert payload["diagnostics"][0]["ruleId"] == "server/handler/handler-naming"
        assert payload["toolingErrors"][0]["ruleId"] is None

    def test_render_policies(self) -> None:
        payload = json.loads(JsonReporter().render_policies([_descriptor("server/port/c", "server", "port")]))
        assert payload == [
            {
                "id": "server/port/c",
                "scope": "horizontal",
                "kind": "static",
                "workspace": "server",
                "layer": "port",
                "description": "describe server/port/c",
                "why": "",
                "policyPath": "",
            }
        ]
