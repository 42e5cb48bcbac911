"""Exception taxonomy for the policy engine.

Configuration errors are fatal at startup. Selection errors abort the affected
request and name the missing or unrecognised resource. Violations are not
exceptions; they are Diagnostics.
"""


class GuardrailsError(Exception):
    """Base class for every error raised by guardrails."""


class ConfigurationError(GuardrailsError):
    """A policy, registry or filter was declared incorrectly."""


class DuplicatePolicyError(ConfigurationError):
    def __init__(self, policy_id: str, scope: str) -> None:
        super().__init__(f"duplicate policy id '{policy_id}' in scope '{scope}'")
        self.policy_id = policy_id
        self.scope = scope


class InvalidPolicyFilterError(ConfigurationError):
    def __init__(self, name: str, value: object, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"invalid {name} filter {value!r}; expected one of: {', '.join(allowed)}"
        )
        self.name = name
        self.value = value


class SemanticPolicyDefinitionError(ConfigurationError):
    """An entry of the semantic policy file is malformed."""


class SelectionError(GuardrailsError):
    """A target file could not be mapped to its policy documents."""


class UnsupportedFileFormatError(SelectionError):
    def __init__(self, file_name: str) -> None:
        super().__init__(f"unsupported file format: {file_name}")
        self.file_name = file_name


class PolicyDocumentNotFoundError(SelectionError):
    def __init__(self, path: str) -> None:
        super().__init__(f"policy file not found: {path}")
        self.path = path


class ParseError(GuardrailsError):
    """Source text could not be turned into a syntax tree."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(f"failed to parse {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason
