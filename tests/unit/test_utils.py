"""Unit tests for shared utilities: tokenizer, timestamps, table formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from taskdispatch.utils.report_formatter import Column, TableFormatter, truncate_display
from taskdispatch.utils.timestamp import hours_between, parse_timestamp
from taskdispatch.utils.token_processing import Tokenizer


@pytest.mark.unit
class TestTokenizer:
    def test_default_lowercases_word_runs(self):
        assert Tokenizer().tokenize("Fix the API-gateway, ASAP!") == ["fix", "the", "api", "gateway", "asap"]

    def test_stopwords_and_min_length(self):
        tokenizer = Tokenizer(custom_stopwords={"This"}, min_token_length=4)
        assert tokenizer("Update this billing dashboard now") == ["update", "billing", "dashboard"]

    def test_drop_numeric(self):
        assert Tokenizer(drop_numeric=True).tokenize("ship 2 builds in Q3") == ["ship", "builds", "in", "q3"]

    def test_keep_case(self):
        assert Tokenizer(lowercase=False).tokenize("Data Analysis") == ["Data", "Analysis"]

    def test_token_set(self):
        assert Tokenizer().token_set("the data, the data") == frozenset({"the", "data"})

    def test_empty(self):
        assert Tokenizer().tokenize("") == []

    def test_config_dict(self):
        config = Tokenizer(custom_stopwords={"b", "a"}, min_token_length=3).get_config_dict()

        assert config["stopwords"] == ["a", "b"]
        assert config["min_token_length"] == 3


@pytest.mark.unit
class TestTimestamps:
    def test_parse_zulu(self):
        assert parse_timestamp("2025-11-13T18:45:40Z") == datetime(
            2025, 11, 13, 18, 45, 40, tzinfo=timezone.utc
        )

    def test_parse_passthrough(self):
        moment = datetime(2025, 1, 1)
        assert parse_timestamp(moment) is moment

    @pytest.mark.parametrize("value", [None, "", "yesterday-ish", 1700000000, 1.5])
    def test_parse_invalid(self, value):
        assert parse_timestamp(value) is None

    def test_hours_between_mixed_awareness(self):
        aware = datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)
        naive = datetime(2025, 3, 5, 6, 0)

        assert hours_between(naive, aware) == pytest.approx(6)
        assert hours_between(aware, naive) == pytest.approx(-6)

    def test_hours_between_aware(self):
        start = datetime(2025, 3, 5, tzinfo=timezone.utc)
        assert hours_between(start, start + timedelta(days=3)) == pytest.approx(72)


@pytest.mark.unit
class TestTableFormatter:
    def test_truncate_display(self):
        assert truncate_display("this is a very long string", 10) == "this is..."
        assert truncate_display("short", 10) == "short"

    def test_table_rows(self):
        table = TableFormatter([Column("Name", 6), Column("Score", 6, align=">", precision=1)], total_width=13)
        table.add_table_header().add_row(["Ada", 89.04]).add_row(["Grace Hopper", 7.5])

        assert table.render().splitlines() == [
            "Name    Score",
            "-" * 13,
            "Ada      89.0",
            "Gra...    7.5",
        ]

    def test_row_length_mismatch(self):
        table = TableFormatter([Column("Name", 6)])
        with pytest.raises(ValueError, match="Row has 2 values for 1 columns"):
            table.add_row(["a", "b"])

    def test_section_and_key_values(self):
        table = TableFormatter([], total_width=5)
        table.add_section_header("Top").add_key_value("Task", "x").add_blank_line()

        assert table.render() == "=====\nTop\n=====\n  Task: x\n"
