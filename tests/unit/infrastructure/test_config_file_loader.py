"""Unit tests for ConfigFileLoader."""

from guardrails_policy.infrastructure.config_file_loader import ConfigFileLoader


def test_loads_guardrails_section(tmp_path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.guardrails]\njobs = 4\nexclude_dirs = ["dist"]\n\n[tool.other]\nx = 1\n',
        encoding="utf-8",
    )
    nested = tmp_path / "server" / "src"
    nested.mkdir(parents=True)

    config, tool = ConfigFileLoader.load_config_from_fs(nested)

    assert config == {"jobs": 4, "exclude_dirs": ["dist"]}
    assert tool["other"] == {"x": 1}


def test_missing_section_returns_empty_config(tmp_path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
    config, tool = ConfigFileLoader.load_config_from_fs(tmp_path)
    assert config == {}
    assert tool == {}
