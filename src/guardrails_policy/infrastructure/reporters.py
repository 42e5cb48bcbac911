"""Reporter implementations: plain text, markdown and JSON renderings of a run."""

import json
from collections import defaultdict
from typing import Sequence

from guardrails_policy.domain.constants import MAX_OUTPUT_CHARS, TAIL_RATIO
from guardrails_policy.domain.entities import AnalysisRun, PolicyDescriptor


def truncate_output(output: str, max_chars: int = MAX_OUTPUT_CHARS) -> str:
    """
    Keep the head and tail of an oversized report, cut on line boundaries.

    The tail gets TAIL_RATIO of the budget because the summary sits at the end.
    """
    if len(output) <= max_chars:
        return output
    tail_chars = int(max_chars * TAIL_RATIO)
    head_chars = max_chars - tail_chars
    head = output[:head_chars]
    tail = output[-tail_chars:] if tail_chars else ""

    head_end = head.rfind("\n")
    tail_start = tail.find("\n")
    clean_head = head[:head_end] if head_end > 0 else head
    clean_tail = tail[tail_start + 1:] if tail_start >= 0 else tail

    omitted = len(output) - len(clean_head) - len(clean_tail)
    return "\n".join(
        [clean_head, "", f"... (about {round(omitted / 1000)}K chars omitted) ...", "", clean_tail]
    )


def group_by_workspace(
    descriptors: Sequence[PolicyDescriptor],
) -> dict[str, dict[str, list[PolicyDescriptor]]]:
    """workspace -> layer -> descriptors, all in first-seen order."""
    grouped: dict[str, dict[str, list[PolicyDescriptor]]] = defaultdict(lambda: defaultdict(list))
    for descriptor in descriptors:
        grouped[descriptor.workspace][descriptor.layer].append(descriptor)
    return {workspace: dict(layers) for workspace, layers in grouped.items()}


class TextReporter:
    """One line per finding, compiler style, for terminals and CI logs."""

    def render_run(self, run: AnalysisRun) -> str:
        lines = [
            f"{d.location}: {d.severity.value} [{d.policy_id}] {d.message.splitlines()[0] if d.message else ''}"
            for d in run.diagnostics
        ]
        lines.extend(
            f"{e.file_path}:{e.line}:{e.column}: tooling-error [{e.policy_id or '-'}] {e.message}"
            for e in run.tooling_errors
        )
        lines.append(
            f"{run.files_checked} file(s) checked: {run.error_count} error(s), "
            f"{run.warning_count} warning(s), {len(run.tooling_errors)} tooling error(s)"
        )
        return "\n".join(lines)

    def render_policies(self, descriptors: Sequence[PolicyDescriptor]) -> str:
        return "\n".join(f"{d.id}\t{d.kind.value}\t{d.description}" for d in descriptors)


class MarkdownReporter:
    """Markdown report for humans and review agents, truncated to max_chars."""

    def __init__(self, max_chars: int = MAX_OUTPUT_CHARS) -> None:
        self.max_chars = max_chars

    def render_run(self, run: AnalysisRun) -> str:
        output = "# Guardrails policy check\n\n"
        if run.diagnostics:
            output += "## Violations\n\n"
            for report in run.reports:
                if not report.diagnostics:
                    continue
                output += f"### {report.file_path}\n\n"
                for d in report.diagnostics:
                    output += f"- **{d.location}** `{d.policy_id}` ({d.severity.value})\n"
                    if d.what:
                        output += f"  - What: {d.what}\n"
                    if d.why:
                        output += f"  - Why: {d.why}\n"
                    if d.policy_path:
                        output += f"  - Policy: `{d.policy_path}`\n"
                    output += "\n"
                    output += "".join(f"  {line}\n" for line in d.message.splitlines())
                    output += "\n"
        if run.tooling_errors:
            output += "## Tooling errors\n\n"
            for e in run.tooling_errors:
                output += f"- **{e.file_path}:{e.line}:{e.column}** `{e.policy_id or 'parser'}`: {e.message}\n"
            output += "\n"
        output += "---\n\n## Summary\n\n"
        status = "FAILED" if run.has_failures() else "PASSED"
        output += f"- **Status**: {status}\n"
        output += f"- Files checked: {run.files_checked}\n"
        output += f"- Errors: {run.error_count}\n"
        output += f"- Warnings: {run.warning_count}\n"
        output += f"- Tooling errors: {len(run.tooling_errors)}\n"
        return truncate_output(output, self.max_chars)

    def render_policies(self, descriptors: Sequence[PolicyDescriptor]) -> str:
        output = "# Available policies\n\n"
        if not descriptors:
            return output + "No policies match the filter.\n"
        for workspace, layers in group_by_workspace(descriptors).items():
            output += f"## {workspace}\n\n"
            for layer, items in layers.items():
                output += f"### {layer}\n\n"
                for d in items:
                    output += f"- `{d.id}` ({d.kind.value}): {d.description}\n"
                output += "\n"
        return truncate_output(output, self.max_chars)


class JsonReporter:
    def render_run(self, run: AnalysisRun) -> str:
        payload = {
            "success": not run.has_failures(),
            "filesChecked": run.files_checked,
            "errorCount": run.error_count,
            "warningCount": run.warning_count,
            "diagnostics": [d.to_dict() for d in run.diagnostics],
            "toolingErrors": [e.to_dict() for e in run.tooling_errors],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def render_policies(self, descriptors: Sequence[PolicyDescriptor]) -> str:
        return json.dumps([d.to_dict() for d in descriptors], indent=2, ensure_ascii=False)
