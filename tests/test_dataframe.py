"""Tests for sumosearch._utils.dataframe module."""

import pandas as pd
import pytest

from sumosearch._utils.dataframe import page_to_dataframe
from sumosearch.results import ResultPage


def make_page(messages, fields=None):
    return ResultPage.model_validate({
        "fields": fields if fields is not None else [
            {"name": "_messagetime", "fieldType": "long", "keyField": False},
            {"name": "_raw", "fieldType": "string", "keyField": False},
        ],
        "messages": [{"map": m} for m in messages],
    })


class TestPageToDataframe:
    """Tests for page_to_dataframe function."""

    def test_converts_basic_page(self):
        page = make_page([
            {"_messagetime": "1704067200000", "_raw": "hello"},
            {"_messagetime": "1704067201000", "_raw": "world"},
        ])

        df = page_to_dataframe(page)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 2
        assert list(df.columns) == ["_messagetime", "_raw"]
        assert df["_raw"].tolist() == ["hello", "world"]

    def test_parses_message_time(self):
        page = make_page([{"_messagetime": "1704067200000", "_raw": "x"}])

        df = page_to_dataframe(page)

        assert pd.api.types.is_datetime64_any_dtype(df["_messagetime"])
        assert df["_messagetime"].iloc[0] == pd.Timestamp("2024-01-01", tz="UTC")

    def test_skips_timestamp_parsing_when_disabled(self):
        page = make_page([{"_messagetime": "1704067200000", "_raw": "x"}])

        df = page_to_dataframe(page, parse_timestamps=False)

        assert df["_messagetime"].iloc[0] == "1704067200000"

    def test_extra_payload_keys_follow_field_columns(self):
        page = make_page([{"_raw": "x", "host": "h1", "_messagetime": "0"}])

        df = page_to_dataframe(page, parse_timestamps=False)

        assert list(df.columns) == ["_messagetime", "_raw", "host"]

    def test_empty_page(self):
        df = page_to_dataframe(make_page([]))

        assert df.empty
        assert list(df.columns) == ["_messagetime", "_raw"]

    def test_non_mapping_payload_raises(self):
        page = make_page(["raw text"])

        with pytest.raises(ValueError) as exc_info:
            page_to_dataframe(page)

        assert "mapping" in str(exc_info.value)

    def test_result_page_method(self):
        page = make_page([{"_messagetime": "1704067200000", "_raw": "x"}], fields=[])

        df = page.to_dataframe()

        assert df["_raw"].tolist() == ["x"]
