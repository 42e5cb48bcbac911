"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from guardrails_policy.infrastructure.di.container import GuardrailsContainer
from guardrails_policy.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = GuardrailsContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        registry_provider=container.get_registry,
        parser=container.get_source_parser(),
        filesystem=container.get_filesystem_gateway(),
        engine=container.get_engine(),
        document_loader=container.get_document_loader(),
        reporters=container.get_reporters(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
