"""
Unit tests for series encoding.
"""
import numpy as np
import pandas as pd
import pytest

from dygraph_charts.columns import AxisSelection, resolve_columns
from dygraph_charts.errors import ConfigurationError, EncodingError
from dygraph_charts.js import ValueKind
from dygraph_charts.series import encode_series, to_epoch_ms


class TestToEpochMs:
    """Tests for timestamp conversion."""

    def test_naive_dates_in_utc(self):
        ms = to_epoch_ms(["1970-01-01", "1970-01-02"])

        assert ms.tolist() == [0, 86_400_000]

    def test_naive_dates_localized(self):
        ms = to_epoch_ms(["2024-01-02 09:30"], tz="America/New_York")

        assert ms.tolist() == [int(pd.Timestamp("2024-01-02 14:30", tz="UTC").value // 1_000_000)]

    def test_aware_timestamps_keep_zone(self):
        ts = pd.Series(pd.to_datetime(["2024-01-02 09:30"]).tz_localize("America/New_York"))

        assert to_epoch_ms(ts, tz="UTC").tolist() == to_epoch_ms(["2024-01-02 14:30"]).tolist()

    def test_mixed_utc_offsets(self):
        """Exchange-local times across a DST switch carry two offsets."""
        ms = to_epoch_ms(["2024-03-01T09:30:00-05:00", "2024-04-01T09:30:00-04:00"])

        assert ms.tolist() == [1709303400000, 1711978200000]

    def test_mixed_offsets_ignore_tz(self):
        values = ["2024-03-01T09:30:00-05:00", "2024-04-01T09:30:00-04:00"]

        assert to_epoch_ms(values, tz="Asia/Tokyo").tolist() == to_epoch_ms(values).tolist()

    def test_unparseable(self):
        with pytest.raises(EncodingError):
            to_epoch_ms(["not a date"])

    def test_missing_timestamp(self):
        with pytest.raises(EncodingError, match="rows \\[1\\]"):
            to_epoch_ms(["2024-01-01", None])

    def test_unknown_timezone(self):
        with pytest.raises(ConfigurationError, match="Unknown timezone"):
            to_epoch_ms(["2024-01-01"], tz="Mars/Olympus")


class TestEncodeSeries:
    """Tests for encode_series."""

    def test_row_shape(self, spy_frame):
        selection = resolve_columns(spy_frame)
        record = encode_series(spy_frame, selection)

        assert len(record) == len(spy_frame)
        assert record.labels == ("date", "SPY", "SPY.sma200")
        assert all(len(row) == 3 for row in record.rows)

    def test_x_is_deferred_date(self, spy_frame):
        record = encode_series(spy_frame, resolve_columns(spy_frame))
        first = record.rows[0][0]

        assert first.kind is ValueKind.DEFERRED
        assert first.value == f"new Date({record.x_ms[0]})"
        assert record.x_ms[0] == int(pd.Timestamp("2024-01-01", tz="UTC").value // 1_000_000)

    def test_y_values_are_floats(self, spy_frame):
        record = encode_series(spy_frame, resolve_columns(spy_frame))

        assert record.rows[0][1:] == (100.0, 98.0)
        assert isinstance(record.rows[0][1], float)

    def test_column_order_follows_selection(self, spy_frame):
        selection = AxisSelection(x="date", y=("SPY.sma200", "SPY"))
        record = encode_series(spy_frame, selection)

        assert record.rows[0][1:] == (98.0, 100.0)

    def test_booleans_become_zero_one(self):
        table = pd.DataFrame({"date": ["2024-01-01", "2024-01-02"], "flag": [True, False]})

        record = encode_series(table, resolve_columns(table))

        assert [row[1] for row in record.rows] == [1.0, 0.0]

    def test_object_booleans_and_numbers(self):
        table = pd.DataFrame(
            {"date": ["2024-01-01", "2024-01-02", "2024-01-03"], "mixed": [True, 2.5, "3"]}
        )

        record = encode_series(table, resolve_columns(table))

        assert [row[1] for row in record.rows] == [1.0, 2.5, 3.0]

    def test_missing_values_become_none(self):
        table = pd.DataFrame({"date": ["2024-01-01", "2024-01-02"], "sma": [np.nan, 1.5]})

        record = encode_series(table, resolve_columns(table))

        assert [row[1] for row in record.rows] == [None, 1.5]

    def test_non_numeric_y(self):
        table = pd.DataFrame({"date": ["2024-01-01"], "name": ["SPY"]})

        with pytest.raises(EncodingError, match="Column 'name'"):
            encode_series(table, resolve_columns(table))

    def test_input_not_modified(self, spy_frame):
        before = spy_frame.copy()
        encode_series(spy_frame, resolve_columns(spy_frame))

        pd.testing.assert_frame_equal(spy_frame, before)
