"""Interface for run and listing reporting."""

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from guardrails_policy.domain.entities import AnalysisRun, PolicyDescriptor


class AnalysisReporter(Protocol):
    """Protocol for rendering analysis runs and policy listings."""

    def render_run(self, run: "AnalysisRun") -> str:
        """Render the findings of a run."""
        ...

    def render_policies(self, descriptors: Sequence["PolicyDescriptor"]) -> str:
        """Render a policy listing."""
        ...
