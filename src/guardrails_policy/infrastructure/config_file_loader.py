"""Load [tool.guardrails] and [tool] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from start (default cwd).
    """

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> tuple[dict[str, object], dict[str, object]]:
        """Load [tool.guardrails] and [tool] from pyproject.toml. Returns (config_dict, tool_section)."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = toml_lib.load(f)
                    tool_section = data.get("tool", {}) or {}
                    config_dict = tool_section.get("guardrails", {}) or {}
                    return (config_dict, tool_section)
                except (OSError, toml_lib.TOMLDecodeError):
                    pass
            if current_path.parent == current_path:
                return (empty, empty)
            current_path = current_path.parent
