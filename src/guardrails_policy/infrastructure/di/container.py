from typing import TYPE_CHECKING, Any, Optional, cast

from guardrails_policy.domain.config import ConfigurationLoader
from guardrails_policy.domain.engine import TraversalEngine
from guardrails_policy.domain.registry import PolicyRegistry
from guardrails_policy.infrastructure.config_file_loader import ConfigFileLoader
from guardrails_policy.infrastructure.gateways.astroid_gateway import AstroidGateway
from guardrails_policy.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from guardrails_policy.infrastructure.gateways.source_gateway import SourceGateway
from guardrails_policy.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from guardrails_policy.infrastructure.reporters import JsonReporter, MarkdownReporter, TextReporter
from guardrails_policy.infrastructure.services.policy_document_loader import PolicyDocumentLoader
from guardrails_policy.infrastructure.services.semantic_policy_loader import SemanticPolicyLoader
from guardrails_policy.interface.telemetry import ProjectTelemetry
from guardrails_policy.policy import build_default_registry

if TYPE_CHECKING:
    from guardrails_policy.domain.protocols import (
        FileSystemProtocol,
        PolicyDocumentLoaderProtocol,
        SourceParserProtocol,
        TelemetryPort,
    )
    from guardrails_policy.interface.reporters import AnalysisReporter


class GuardrailsContainer:
    """Dependency Injection Container for the guardrails policy engine."""

    _instance: Optional["GuardrailsContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)

        telemetry = ProjectTelemetry("GUARDRAILS", "yellow", "Policy engine online")
        self.register_singleton("TelemetryPort", telemetry)

        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton("TreeSitterGateway", TreeSitterGateway())
        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton(
            "SourceGateway",
            SourceGateway([self.get("TreeSitterGateway"), self.get("AstroidGateway")]),
        )

        self.register_singleton("TraversalEngine", TraversalEngine(config_loader.time_budget_seconds))
        self.register_singleton("PolicyDocumentLoader", PolicyDocumentLoader(filesystem))

        # Reporters, keyed by --format value
        self.register_singleton("TextReporter", TextReporter())
        self.register_singleton("MarkdownReporter", MarkdownReporter(config_loader.max_output_chars))
        self.register_singleton("JsonReporter", JsonReporter())

    # Any: the container holds every kind of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_source_parser(self) -> "SourceParserProtocol":
        """Return the composite TypeScript/Python parser."""
        return cast("SourceParserProtocol", self.get("SourceGateway"))

    def get_engine(self) -> TraversalEngine:
        return cast(TraversalEngine, self.get("TraversalEngine"))

    def get_document_loader(self) -> "PolicyDocumentLoaderProtocol":
        return cast("PolicyDocumentLoaderProtocol", self.get("PolicyDocumentLoader"))

    def get_reporters(self) -> dict[str, "AnalysisReporter"]:
        """Return the reporters by output format name."""
        return {
            "text": cast("AnalysisReporter", self.get("TextReporter")),
            "markdown": cast("AnalysisReporter", self.get("MarkdownReporter")),
            "json": cast("AnalysisReporter", self.get("JsonReporter")),
        }

    def get_registry(self) -> PolicyRegistry:
        """
        Return the policy registry: compiled-in catalog plus semantic policies.

        Lazy so that a broken semantic policy file surfaces as a
        ConfigurationError inside a command rather than at import.
        """
        if "PolicyRegistry" not in self._singletons:
            loader = SemanticPolicyLoader(self.get_config_loader().semantic_policies)
            self.register_singleton("SemanticPolicyLoader", loader)
            self.register_singleton("PolicyRegistry", build_default_registry(loader.load_checks()))
        return cast(PolicyRegistry, self.get("PolicyRegistry"))

    @classmethod
    def get_instance(cls) -> "GuardrailsContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = GuardrailsContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
