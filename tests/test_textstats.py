"""Tests for tokenizing, stopword filtering, aggregation and trend ranking."""
import random
from collections import Counter

import pytest

from journalsite.textstats import (
    STOPWORDS,
    aggregate,
    eligible_series,
    entry_words,
    filter_stopwords,
    text_words,
    hapax_legomena,
    hottest_window,
    month_key,
    rank_hottest,
    rank_spiky,
    tokenize,
    top_words,
    variance,
)


def make_entry(slug, words):
    year, month, _ = (int(x) for x in slug.split("-"))
    return {"slug": slug, "year": year, "month": month, "words": list(words)}


# ----- Tokenizer -----

class TestTokenize:
    def test_lowercases_and_strips_punctuation(self):
        assert list(tokenize("Hello, World! It's 2024.")) == ["hello", "world", "it's", "2024"]

    def test_removes_code_images_and_links(self):
        text = (
            "Before\n```\ncode block words\n```\n"
            "use `inline thing` here "
            "![alt text](pic.png) "
            "[link text](http://example.com) after"
        )
        assert list(tokenize(text)) == ["before", "use", "here", "after"]

    def test_curly_apostrophes_normalized(self):
        assert list(tokenize("Don’t ‘quote’")) == ["don't", "'quote'"]

    def test_is_lazy_and_restartable(self):
        text = "one two three"
        tokens = tokenize(text)
        assert iter(tokens) is tokens
        assert list(tokenize(text)) == list(tokenize(text))

    def test_empty(self):
        assert list(tokenize("")) == []
        assert list(tokenize("  \n\t ")) == []


# ----- Stopword filter -----

class TestFilterStopwords:
    def test_example(self):
        assert filter_stopwords(["run", "run", "fast", "the", "a"]) == ["run", "run", "fast"]

    def test_drops_single_characters(self):
        assert filter_stopwords(["x", "7", "ok"]) == ["ok"]

    @pytest.mark.parametrize("word", sorted(STOPWORDS))
    def test_stopwords_never_survive(self, word):
        text = f"{word.upper()}, ({word}) {word.capitalize()}!"
        assert filter_stopwords(tokenize(text)) == []

    def test_text_words_skips_normalizing(self):
        assert text_words("## Must Do's\n- stretch\nGarden day") == ["must", "do's", "stretch", "garden", "day"]

    def test_entry_words_normalizes_first(self, sample_entry):
        words = entry_words(sample_entry)
        assert "stretch" not in words
        assert "yesterday" not in words
        assert words == ["ran", "along", "river", "morning", "river", "quiet", "later", "read", "gardens"]


# ----- Aggregator -----

class TestAggregate:
    def test_year_and_month_totals(self):
        stats = aggregate([
            make_entry("2023-01-05", ["w"] * 10),
            make_entry("2023-02-10", ["v"] * 5),
        ])
        assert stats.by_year == [(2023, 15)]
        assert stats.by_month == [("2023-01", 10), ("2023-02", 5)]
        assert stats.total_words == 15
        assert stats.entry_counts == [("2023-01-05", 10), ("2023-02-10", 5)]

    def test_frequency_tables(self):
        stats = aggregate([
            make_entry("2022-12-31", ["run", "run", "fast"]),
            make_entry("2023-01-01", ["run"]),
        ])
        assert stats.overall == Counter({"run": 3, "fast": 1})
        assert stats.per_year[2022] == Counter({"run": 2, "fast": 1})
        assert stats.per_year[2023] == Counter({"run": 1})

    def test_month_index_and_series_alignment(self):
        stats = aggregate([
            make_entry("2024-03-01", ["tea", "walk"]),
            make_entry("2023-11-02", ["tea"]),
            make_entry("2024-03-15", ["tea"]),
            make_entry("2024-01-20", ["walk"]),
        ])
        assert stats.months == ["2023-11", "2024-01", "2024-03"]
        assert stats.word_months == {"tea": [1, 0, 2], "walk": [0, 1, 1]}
        for word, series in stats.word_months.items():
            assert len(series) == len(stats.months)
            assert sum(series) == stats.overall[word]

    def test_numeric_tokens_counted_but_not_unique(self):
        stats = aggregate([make_entry("2024-01-01", ["2024", "2024", "garden", "k2"])])
        assert stats.overall["2024"] == 2
        assert stats.unique_words == 2
        assert stats.total_words == 4

    def test_order_independent(self):
        entries = [
            make_entry("2023-05-01", ["a1", "b2"]),
            make_entry("2024-02-01", ["a1"]),
            make_entry("2023-05-09", ["c3", "c3"]),
            make_entry("2023-07-01", ["b2"]),
        ]
        shuffled = list(entries)
        random.Random(7).shuffle(shuffled)
        first, second = aggregate(entries), aggregate(shuffled)
        assert first.by_year == second.by_year
        assert first.by_month == second.by_month
        assert first.overall == second.overall
        assert first.per_year == second.per_year
        assert first.word_months == second.word_months

    def test_empty(self):
        stats = aggregate([])
        assert stats.total_words == 0
        assert stats.unique_words == 0
        assert stats.by_year == []
        assert stats.by_month == []
        assert stats.months == []
        assert stats.word_months == {}

    def test_month_key_zero_pads(self):
        assert month_key(2024, 3) == "2024-03"


def test_top_words_and_hapax():
    overall = Counter({"tea": 12, "walk": 12, "code": 30, "rain": 1, "sun": 1, "moon": 9})
    assert top_words(overall) == [("code", 30), ("tea", 12), ("walk", 12)]
    assert top_words(overall, min_count=1, limit=2) == [("code", 30), ("tea", 12)]
    assert hapax_legomena(overall) == ["rain", "sun"]


# ----- Trend ranker -----

class TestTrends:
    def test_variance(self):
        assert variance([]) == 0.0
        assert variance([5, 5, 5]) == 0.0
        assert variance([1, 3]) == 1.0
        assert variance([0, 1, 2, 8, 9]) == pytest.approx(14.0)

    def test_first_month_dropped_before_gate(self):
        word_months = {
            "early": [20, 1, 1],
            "steady": [0, 5, 5],
            "rare": [0, 4, 5],
        }
        assert eligible_series(word_months) == {"steady": [5, 5]}

    def test_rank_spiky_orders_by_variance_then_word(self):
        word_months = {
            "flat": [0, 5, 5, 5],
            "spike": [0, 0, 0, 15],
            "bravo": [0, 12, 0, 0],
            "alpha": [0, 0, 12, 0],
        }
        ranked = rank_spiky(word_months)
        assert [r["word"] for r in ranked] == ["spike", "alpha", "bravo", "flat"]
        assert ranked[0]["series"] == [0, 0, 15]
        assert ranked[0]["total"] == 15
        assert ranked[1]["variance"] == ranked[2]["variance"]
        assert ranked[-1]["variance"] == 0.0

    @pytest.mark.parametrize("months, window", [(0, 1), (1, 1), (7, 1), (8, 1), (16, 2), (24, 3), (100, 3)])
    def test_hottest_window(self, months, window):
        assert hottest_window(months) == window

    def test_hottest_example(self):
        # Six months in the index; the first is dropped.
        ranked = rank_hottest({"focus": [3, 0, 1, 2, 8, 9]}, month_count=6)
        assert ranked == [{"word": "focus", "prev": 8, "recent": 9, "delta": 1, "series": [0, 1, 2, 8, 9]}]

    def test_hottest_keeps_only_rising(self):
        word_months = {
            "up": [0, 2, 2, 2, 10],
            "down": [0, 10, 2, 10, 2],
            "same": [0, 5, 0, 5, 5],
        }
        ranked = rank_hottest(word_months, month_count=5)
        assert [r["word"] for r in ranked] == ["up"]
        for r in ranked:
            assert r["delta"] > 0
            assert r["delta"] == r["recent"] - r["prev"]

    def test_hottest_without_previous_window(self):
        # One month in the index: window 1, no previous window.
        ranked = rank_hottest({"solo": [12]}, month_count=1)
        assert ranked == []
        ranked = rank_hottest({"pair": [0, 12]}, month_count=1)
        assert ranked[0]["prev"] == 0
        assert ranked[0]["recent"] == 12

    def test_hottest_previous_window_empty_at_boundary(self):
        # Two months: the previous window is allowed but the trimmed series
        # only holds the recent month.
        ranked = rank_hottest({"w": [0, 12]}, month_count=2)
        assert ranked == [{"word": "w", "prev": 0, "recent": 12, "delta": 12, "series": [12]}]

    def test_hottest_ties_and_limit(self):
        word_months = {f"w{i:02d}": [0, 0, 10] for i in range(60)}
        ranked = rank_hottest(word_months, month_count=3)
        assert len(ranked) == 50
        assert ranked[0]["word"] == "w00"
        assert ranked[-1]["word"] == "w49"
        assert len(rank_hottest(word_months, month_count=3, limit=5)) == 5

    def test_rankings_do_not_mutate_input(self):
        word_months = {"tea": [1, 5, 9]}
        rank_spiky(word_months)
        rank_hottest(word_months, month_count=3)
        assert word_months == {"tea": [1, 5, 9]}
