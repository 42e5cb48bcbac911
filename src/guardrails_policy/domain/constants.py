"""
Guardrails: shared constants for policies, selectors and reporters.
"""

from enum import Enum

# GUARDRAILS: ANSI Yellow (\033[33m)
_YELLOW: str = "\033[33m"
_RESET: str = "\033[0m"
_GUARDRAILS_ART: str = r"""
   ______                     __          _ __
  / ____/_  ______ __________/ /________ (_) /____
 / / __/ / / / __ `/ ___/ __  / ___/ __ `/ / / ___/
/ /_/ / /_/ / /_/ / /  / /_/ / /  / /_/ / / (__  )
\____/\__,_/\__,_/_/   \__,_/_/   \__,_/_/_/____/
"""
GUARDRAILS_BANNER = _YELLOW + _GUARDRAILS_ART + _RESET

POLICY_PACKAGE: str = "guardrails_policy.policy"

class PolicyScope(str, Enum):
    """Axis a policy belongs to: one workspace layer, or across layers."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

class PolicyKind(str, Enum):
    """Static = structural/syntactic; semantic = derived from business invariants."""

    STATIC = "static"
    SEMANTIC = "semantic"

class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"

class Dialect(str, Enum):
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    PYTHON = "python"

# Layer names recognised when a check's module path does not name its layer.
KNOWN_LAYERS: tuple[str, ...] = (
    "domain-model",
    "use-case",
    "di-container",
    "handler",
    "repository",
    "port",
    "logger",
    "common",
)

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = ("node_modules", ".git", "dist", "build")

# Reporter output limits.
MAX_OUTPUT_CHARS: int = 20000
TAIL_RATIO: float = 0.85

# Document header prepended to every loaded policy document.
POLICY_DOCUMENT_HEADER: str = "# Policy: {name}\n\n"

# Logger methods; never considered fallible or business calls.
LOGGER_METHODS: frozenset[str] = frozenset({"debug", "info", "warn", "error", "appendKeys"})
