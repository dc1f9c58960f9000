"""
Unit tests for ribbon color encoding.
"""
import numpy as np
import pandas as pd
import pytest

from dygraph_charts.config import RibbonSpec
from dygraph_charts.errors import ConfigurationError, RibbonLengthError
from dygraph_charts.ribbon import build_ribbon, canonical_color, normalize_ribbon


class TestCanonicalColor:
    """Tests for canonical_color."""

    def test_named_and_hex_match(self):
        """Names and hex strings of the same color are deduplicated."""
        assert canonical_color("lightgreen") == canonical_color("#90EE90") == "#90EE90"

    def test_lowercase_hex(self):
        assert canonical_color("#ff0000") == "#FF0000"

    def test_short_hex(self):
        assert canonical_color("#f00") == "#FF0000"

    def test_transparent(self):
        assert canonical_color("transparent") == "#FFFFFF"

    @pytest.mark.parametrize("color", ["none", "None", None])
    def test_no_color_matches_transparent(self, color):
        assert canonical_color(color) == canonical_color("transparent") == "#FFFFFF"

    def test_alpha_dropped(self):
        assert canonical_color("#FF000080") == "#FF0000"

    def test_invalid_color(self):
        with pytest.raises(ConfigurationError, match="Invalid color"):
            canonical_color("not-a-color")


class TestBuildRibbon:
    """Tests for build_ribbon."""

    def test_first_occurrence_palette(self):
        spec = RibbonSpec(colors=("red", "transparent", "transparent", "lightblue", "red"))

        plan = build_ribbon(spec, 5)

        assert plan.palette == ("#FF0000", "#FFFFFF", "#ADD8E6")
        assert plan.indices == (0, 1, 1, 2, 0)

    def test_indices_reconstruct_colors(self):
        colors = ["transparent"] * 3 + ["lightgreen", "#90EE90", "red", "transparent"]

        plan = build_ribbon(RibbonSpec(colors=colors), len(colors))

        assert plan.colors() == [canonical_color(c) for c in colors]
        assert len(plan.palette) == len(set(plan.palette))

    def test_deterministic(self):
        spec = RibbonSpec(colors=("blue", "red", "blue", "green"))

        assert build_ribbon(spec, 4) == build_ribbon(spec, 4)

    def test_length_mismatch(self):
        spec = RibbonSpec(colors=("red", "blue"))

        with pytest.raises(RibbonLengthError, match="not equal to data length 3"):
            build_ribbon(spec, 3)

    def test_height_and_position(self):
        plan = build_ribbon(RibbonSpec(colors=("red",), height=0.2, position=0.1), 1)

        assert plan.to_options() == {
            "ribbonData": [0],
            "ribbon": {"palette": ["#FF0000"], "height": 0.2, "position": 0.1},
        }


class TestNormalizeRibbon:
    """Tests for the accepted ribbon argument shapes."""

    def test_bare_sequence(self):
        spec = normalize_ribbon(["red", "blue"])

        assert spec == RibbonSpec(colors=("red", "blue"), height=1.0, position=0.0)

    def test_mapping_with_pos(self):
        spec = normalize_ribbon({"colors": ["red"], "height": 0.2, "pos": 0.1})

        assert spec.position == 0.1
        assert spec.height == 0.2

    @pytest.mark.parametrize("wrap", [pd.Series, np.array])
    def test_mapping_with_array_colors(self, wrap):
        """pandas and numpy color vectors are accepted inside a mapping."""
        spec = normalize_ribbon({"colors": wrap(["red", "lightgreen"]), "height": 0.2, "pos": 0.1})

        assert spec.colors == ("red", "lightgreen")

    def test_mapping_without_colors(self):
        assert normalize_ribbon({"height": 0.5}).colors == ()

    def test_spec_passthrough(self):
        spec = RibbonSpec(colors=("red",))

        assert normalize_ribbon(spec) is spec

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown ribbon keys"):
            normalize_ribbon({"colors": ["red"], "width": 1})

    def test_single_string(self):
        with pytest.raises(ConfigurationError):
            normalize_ribbon("red")

    @pytest.mark.parametrize("height", [-0.1, 1.5])
    def test_height_out_of_range(self, height):
        with pytest.raises(ConfigurationError, match="within \\[0, 1\\]"):
            RibbonSpec(colors=("red",), height=height)
