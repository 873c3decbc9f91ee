"""Unit tests for the per-call skill relevance map."""

import pytest

from taskdispatch.contexts.ranking.models import Skill
from taskdispatch.contexts.ranking.relevance import (
    KEYWORD_HIT_RELEVANCE,
    LOOSE_MATCH_RELEVANCE,
    NAME_IN_TEXT_RELEVANCE,
    REQUIRED_SKILL_RELEVANCE,
    build_relevance_map,
    extract_task_words,
)

CATALOG = [
    Skill("sk-py", "Python", "Backend services and scripting"),
    Skill("sk-report", "Report", "Quarterly report preparation and analysis"),
    Skill("sk-data", "Data Analysis", "Statistics and dashboards"),
    Skill("sk-ml", "Machine Learning"),
]


@pytest.mark.unit
class TestExtractTaskWords:
    def test_drops_short_words_and_stopwords(self):
        assert extract_task_words("Fix this login bug with the API") == ["login"]

    def test_lowercases_and_splits_on_punctuation(self):
        assert extract_task_words("Deploy: staging/production!") == ["deploy", "staging", "production"]

    def test_empty(self):
        assert extract_task_words("") == []
        assert extract_task_words(None) == []


@pytest.mark.unit
class TestBuildRelevanceMap:
    """Each pass keeps the highest relevance per skill."""

    def test_required_skill_case_insensitive(self):
        relevance = build_relevance_map("Sort out the numbers", ["report"], CATALOG)
        assert relevance.weights == {"sk-report": REQUIRED_SKILL_RELEVANCE}

    def test_required_beats_name_in_text(self):
        relevance = build_relevance_map("Update the report", ["Report"], CATALOG)
        assert relevance.weights["sk-report"] == REQUIRED_SKILL_RELEVANCE

    def test_name_in_text(self):
        relevance = build_relevance_map("Fix the python backend", [], CATALOG)
        # name (8) beats two keyword hits (4)
        assert relevance.weights == {"sk-py": NAME_IN_TEXT_RELEVANCE}

    def test_keyword_hits(self):
        relevance = build_relevance_map("Build dashboards with statistics for sales", [], CATALOG)
        assert relevance.weights == {"sk-data": 2 * KEYWORD_HIT_RELEVANCE}

    def test_repeated_skill_keywords_each_count(self):
        catalog = [Skill("sk-st", "Streams", "streaming pipelines streaming")]
        relevance = build_relevance_map("fix streaming", [], catalog)
        assert relevance.weights == {"sk-st": 2 * KEYWORD_HIT_RELEVANCE}

    def test_loose_fallback(self):
        relevance = build_relevance_map("Tune the learn rate", [], CATALOG)
        assert relevance.weights == {"sk-ml": LOOSE_MATCH_RELEVANCE}

    def test_loose_fallback_only_when_nothing_else(self):
        relevance = build_relevance_map("Tune the learn rate in python", [], CATALOG)
        assert relevance.weights == {"sk-py": NAME_IN_TEXT_RELEVANCE}

    def test_unknown_required_skill_ignored(self):
        relevance = build_relevance_map("lol that meme was great", ["Rust"], CATALOG)

        assert relevance.is_empty()
        assert relevance.total == 0

    def test_catalog_order_and_names(self):
        relevance = build_relevance_map("Write the python report", ["Data Analysis"], CATALOG)

        assert list(relevance.weights) == ["sk-py", "sk-report", "sk-data"]
        assert relevance.name_of("sk-data") == "Data Analysis"
        assert relevance.total == 8 + 8 + 10

    def test_blank_catalog_names_skipped(self):
        catalog = [Skill("sk-blank", "  "), Skill("sk-py", "Python")]
        relevance = build_relevance_map("anything here", [], catalog)
        assert relevance.is_empty()
