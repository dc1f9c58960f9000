"""
Unit tests for options merging and defaults.
"""
import numpy as np
import pytest

from dygraph_charts.errors import ConfigurationError
from dygraph_charts.js import deferred
from dygraph_charts.options import DEFAULT_RIGHT_GAP, apply_defaults, merge_options
from dygraph_charts.theme import DARK_THEME


class TestMergeOptions:
    """Tests for merge_options."""

    def test_scalar_colors_become_list(self):
        assert merge_options({"colors": "red"}, {}) == {"colors": ["red"]}

    def test_sequence_colors_become_list(self):
        assert merge_options({}, {"colors": ("black", "blue")}) == {"colors": ["black", "blue"]}
        assert merge_options({"colors": np.array(["red"])})["colors"] == ["red"]

    def test_mapping_colors_rejected(self):
        with pytest.raises(ConfigurationError, match="colors"):
            merge_options({"colors": {"a": "red"}})

    def test_recursive_merge(self):
        assert merge_options({"a": {"x": 1}}, {"a": {"y": 2}}) == {"a": {"x": 1, "y": 2}}

    def test_later_wins(self):
        merged = merge_options({"title": "a", "rightGap": 20}, {"title": "b"}, {"title": "c"})

        assert merged == {"title": "c", "rightGap": 20}

    def test_scalar_replaces_mapping(self):
        assert merge_options({"a": {"x": 1}}, {"a": 5}) == {"a": 5}

    def test_none_overrides_skipped(self):
        assert merge_options(None, None, {"a": 1}) == {"a": 1}

    def test_inputs_not_mutated(self):
        base = {"a": {"x": 1}}
        override = {"a": {"y": 2}}

        merged = merge_options(base, override)
        merged["a"]["z"] = 3

        assert base == {"a": {"x": 1}}
        assert override == {"a": {"y": 2}}

    def test_deferred_values_kept(self):
        plotter = deferred("Dygraph.Plotters.candlePlotter")

        assert merge_options({}, {"plotter": plotter})["plotter"] is plotter

    def test_non_mapping_override(self):
        with pytest.raises(ConfigurationError, match="#1 must be a mapping"):
            merge_options({}, ["title", "x"])

    def test_non_string_keys(self):
        with pytest.raises(ConfigurationError, match="must be strings"):
            merge_options({}, {1: "x"})


class TestApplyDefaults:
    """Tests for apply_defaults."""

    def test_right_gap_default(self):
        assert apply_defaults({}) == {"rightGap": DEFAULT_RIGHT_GAP}

    def test_right_gap_respected(self):
        assert "rightGap" not in apply_defaults({"rightGap": 0})

    def test_legend_follow(self):
        defaults = apply_defaults({"legendFollow": True, "rightGap": 5})

        assert defaults == {
            "labelsDivStyles": {
                "pointerEvents": "none",
                "backgroundColor": "rgba(255, 255, 255, 0.5)",
            }
        }

    def test_legend_follow_false(self):
        assert "labelsDivStyles" not in apply_defaults({"legendFollow": False})

    def test_theme_legend_background(self):
        defaults = apply_defaults({"legendFollow": True}, theme=DARK_THEME)

        assert defaults["labelsDivStyles"]["backgroundColor"] == DARK_THEME.legend_background

    def test_user_options_override_defaults(self):
        user = {"legendFollow": True, "labelsDivStyles": {"backgroundColor": "white"}}

        merged = merge_options(apply_defaults(user), user)

        assert merged["labelsDivStyles"] == {"pointerEvents": "none", "backgroundColor": "white"}
