"""
Tests für shapes_config

Testet Defaults, YAML-Laden, Validierung und Overrides.
"""

import pytest

from shapes_config import (
    CONFIG_ENV_VAR,
    DEFAULT_DIFFICULTY_SETTINGS,
    Difficulty,
    DifficultySettings,
    ShapesConfig,
    load_config,
    with_overrides,
)
from shapes_exceptions import InvalidConfigError


def write_yaml(tmp_path, content: str):
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_missing_file_uses_defaults(self, tmp_path):
        """Test: Fehlende Datei liefert die eingebaute Tabelle."""
        config = load_config(tmp_path / "does_not_exist.yaml")

        assert config.difficulty_settings == DEFAULT_DIFFICULTY_SETTINGS
        assert config.source is None

    def test_bundled_file_matches_defaults(self):
        """Test: Mitgelieferte YAML-Datei entspricht den Defaults."""
        config = load_config()
        assert config.difficulty_settings == DEFAULT_DIFFICULTY_SETTINGS
        assert config.solver_cache_size == 100_000
        assert config.any_shape_probability == pytest.approx(0.1)

    @pytest.mark.parametrize(
        "level,expected",
        [
            (Difficulty.LEVEL_1, DifficultySettings(2, 2, 2, 4, 1)),
            (Difficulty.LEVEL_5, DifficultySettings(4, 4, 6, 30, 2)),
        ],
    )
    def test_settings_for(self, level, expected):
        assert ShapesConfig().settings_for(level) == expected

    @pytest.mark.parametrize("value,expected", [(0, 1), (-3, 1), (6, 5), (99, 5)])
    def test_settings_for_clamps(self, value, expected):
        config = ShapesConfig()
        assert config.settings_for(value) == config.settings_for(expected)


class TestYamlLoading:
    def test_partial_override(self, tmp_path):
        """Test: Nur angegebene Stufen werden überschrieben."""
        path = write_yaml(
            tmp_path,
            """
difficulty_levels:
  3:
    width: 5
    height: 5
    min_constraints: 2
    max_constraints: 7
solver:
  cache_size: 500
generator:
  any_shape_probability: 0
""",
        )
        config = load_config(path)

        assert config.settings_for(3) == DifficultySettings(5, 5, 2, 7, 1)
        assert config.settings_for(1) == DEFAULT_DIFFICULTY_SETTINGS[Difficulty.LEVEL_1]
        assert config.solver_cache_size == 500
        assert config.any_shape_probability == 0.0
        assert config.source == str(path)

    def test_env_var(self, tmp_path, monkeypatch):
        """Test: SHAPES_CONFIG zeigt auf eine alternative Datei."""
        path = write_yaml(tmp_path, "solver:\n  cache_size: 42\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config().solver_cache_size == 42

    def test_empty_file(self, tmp_path):
        config = load_config(write_yaml(tmp_path, ""))
        assert config.difficulty_settings == DEFAULT_DIFFICULTY_SETTINGS

    @pytest.mark.parametrize(
        "content",
        [
            "difficulty_levels: [1, 2",
            "- just\n- a list\n",
            "difficulty_levels:\n  7:\n    width: 2\n",
            "difficulty_levels:\n  1: 5\n",
            "difficulty_levels:\n  1:\n    width: 2\n    height: 2\n",
            "difficulty_levels:\n  1:\n    width: 0\n    height: 2\n    min_constraints: 1\n    max_constraints: 2\n",
            "difficulty_levels:\n  1:\n    width: 2\n    height: 2\n    min_constraints: 5\n    max_constraints: 2\n",
            "solver:\n  cache_size: 0\n",
            "generator:\n  any_shape_probability: 2.5\n",
        ],
    )
    def test_invalid_content_raises(self, tmp_path, content):
        """Test: Ungültige Inhalte werfen InvalidConfigError mit Pfad im Kontext."""
        path = write_yaml(tmp_path, content)
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.context["config_path"] == str(path)


class TestOverrides:
    def test_with_overrides_copies(self):
        """Test: Overrides verändern die Original-Konfiguration nicht."""
        base = ShapesConfig()
        changed = with_overrides(base, solver_cache_size=10)

        assert changed.solver_cache_size == 10
        assert base.solver_cache_size == 100_000

        changed.difficulty_settings[Difficulty.LEVEL_1] = DifficultySettings(3, 3, 1, 2, 0)
        assert base.settings_for(1) == DEFAULT_DIFFICULTY_SETTINGS[Difficulty.LEVEL_1]
