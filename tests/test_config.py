"""Tests for safe_router.config and safe_router.config_loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from safe_router._errors import ConfigError, UnsupportedConvention
from safe_router.config import GeneratorConfig, resolve_routes_root
from safe_router.config_loader import find_config_file, load_config, read_config_file

# ---------------------------------------------------------------------------
# GeneratorConfig
# ---------------------------------------------------------------------------


class TestGeneratorConfig:
    """Defaults, validation and derived paths."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = GeneratorConfig(root=tmp_path)
        assert config.project_type == "react"
        assert config.mode == "hierarchy"
        assert config.out == Path("generated/routes.d.ts")
        assert config.watch is False
        assert config.debounce_ms == 150

    def test_frozen(self, tmp_path: Path) -> None:
        config = GeneratorConfig(root=tmp_path)
        with pytest.raises(AttributeError):
            config.mode = "flat"  # type: ignore[misc]

    def test_relative_root_resolved(self) -> None:
        config = GeneratorConfig(root=Path("."))
        assert config.root.is_absolute()

    def test_output_path_relative_to_root(self, tmp_path: Path) -> None:
        config = GeneratorConfig(root=tmp_path)
        assert config.output_path == tmp_path / "generated" / "routes.d.ts"

    def test_output_path_absolute(self, tmp_path: Path) -> None:
        out = tmp_path / "elsewhere" / "types.d.ts"
        config = GeneratorConfig(root=tmp_path, out=out)
        assert config.output_path == out

    def test_out_string_coerced(self, tmp_path: Path) -> None:
        config = GeneratorConfig(root=tmp_path, out="types/r.d.ts")  # type: ignore[arg-type]
        assert config.out == Path("types/r.d.ts")

    def test_unknown_project_type(self, tmp_path: Path) -> None:
        with pytest.raises(UnsupportedConvention):
            GeneratorConfig(root=tmp_path, project_type="vue")

    def test_unknown_mode(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mode"):
            GeneratorConfig(root=tmp_path, mode="tree")

    def test_negative_debounce(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="debounce_ms"):
            GeneratorConfig(root=tmp_path, debounce_ms=-1)

    def test_non_integer_debounce(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="debounce_ms must be an integer"):
            GeneratorConfig(root=tmp_path, debounce_ms="fast")  # type: ignore[arg-type]

    def test_boolean_debounce_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="debounce_ms"):
            GeneratorConfig(root=tmp_path, debounce_ms=True)

    def test_non_boolean_watch(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="watch"):
            GeneratorConfig(root=tmp_path, watch="yes please")  # type: ignore[arg-type]

    def test_non_string_routes_dir(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="routes_dir"):
            GeneratorConfig(root=tmp_path, routes_dir=42)  # type: ignore[arg-type]

    def test_debounce_seconds(self, tmp_path: Path) -> None:
        assert GeneratorConfig(root=tmp_path, debounce_ms=250).debounce_seconds == 0.25


class TestResolveRoutesRoot:
    """Routes root candidates per convention."""

    def test_next_app_default(self, tmp_path: Path) -> None:
        assert resolve_routes_root(tmp_path, "next-app") == tmp_path / "app"

    def test_next_app_src_layout(self, tmp_path: Path) -> None:
        (tmp_path / "src" / "app").mkdir(parents=True)
        assert resolve_routes_root(tmp_path, "next-app") == tmp_path / "src" / "app"

    def test_next_page_default(self, tmp_path: Path) -> None:
        assert resolve_routes_root(tmp_path, "next-page") == tmp_path / "pages"

    def test_react_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "routes.yaml").write_text("[]\n")
        assert resolve_routes_root(tmp_path, "react") == tmp_path / "routes.yaml"

    def test_explicit_routes_dir_wins(self, tmp_path: Path) -> None:
        (tmp_path / "app").mkdir()
        assert resolve_routes_root(tmp_path, "next-app", "web/app") == tmp_path / "web" / "app"

    def test_routes_path_property(self, tmp_path: Path) -> None:
        config = GeneratorConfig(root=tmp_path, project_type="next-page")
        assert config.routes_path == tmp_path / "pages"


# ---------------------------------------------------------------------------
# Config file loading
# ---------------------------------------------------------------------------


class TestLoadConfig:
    """safe-router.yaml / .toml merged with overrides."""

    def test_no_file(self, tmp_path: Path) -> None:
        assert find_config_file(tmp_path) is None
        assert read_config_file(tmp_path) == {}
        config = load_config(tmp_path)
        assert config.project_type == "react"

    def test_yaml_top_level(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("type: next-app\nmode: flat\n")
        config = load_config(tmp_path)
        assert config.project_type == "next-app"
        assert config.mode == "flat"

    def test_yaml_section(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yml").write_text(
            "safe-router:\n  type: next-page\n  out: types/routes.d.ts\n"
        )
        config = load_config(tmp_path)
        assert config.project_type == "next-page"
        assert config.out == Path("types/routes.d.ts")

    def test_toml_section(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.toml").write_text(
            '[safe_router]\nproject_type = "next-app"\ndebounce_ms = 40\n'
        )
        config = load_config(tmp_path)
        assert config.project_type == "next-app"
        assert config.debounce_ms == 40

    def test_overrides_win(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("type: next-app\nmode: flat\n")
        config = load_config(tmp_path, mode="hierarchy")
        assert config.mode == "hierarchy"
        assert config.project_type == "next-app"

    def test_none_overrides_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("mode: flat\n")
        config = load_config(tmp_path, mode=None, project_type=None)
        assert config.mode == "flat"

    def test_unknown_key(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("colour: blue\n")
        with pytest.raises(ConfigError, match="colour"):
            load_config(tmp_path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("type: [unclosed\n")
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.toml").write_text("type = \n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_utf8_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_bytes(b"mode: \xff\xfe\n")
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path)

    def test_invalid_utf8_toml(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.toml").write_bytes(b'mode = "\xff"\n')
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path)

    def test_wrongly_typed_file_value(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("debounce_ms: fast\n")
        with pytest.raises(ConfigError, match="debounce_ms"):
            load_config(tmp_path)

    def test_yaml_not_a_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    def test_yaml_preferred_over_toml(self, tmp_path: Path) -> None:
        (tmp_path / "safe-router.yaml").write_text("mode: flat\n")
        (tmp_path / "safe-router.toml").write_text('mode = "hierarchy"\n')
        assert find_config_file(tmp_path) == tmp_path / "safe-router.yaml"
