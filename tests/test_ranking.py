"""Tests for plain and keyword-scored ranking."""

from historylens.core.ranking import (
    sort_by_relevance_with_keywords,
    sort_history_by_relevance,
)

from conftest import NOW


class TestPlainRanking:
    def test_visit_count_then_recency(self, make_record):
        a = make_record("https://a.com", visit_count=5, days_ago=10)
        b = make_record("https://b.com", visit_count=9, days_ago=20)
        c = make_record("https://c.com", visit_count=5, days_ago=1)

        assert sort_history_by_relevance([a, b, c]) == [b, c, a]

    def test_full_ties_are_stable(self, make_record):
        first = make_record("https://first.com", visit_count=3, days_ago=2)
        second = make_record("https://second.com", visit_count=3, days_ago=2)

        assert sort_history_by_relevance([first, second]) == [first, second]
        assert sort_history_by_relevance([second, first]) == [second, first]

    def test_idempotent(self, sample_history):
        once = sort_history_by_relevance(sample_history)

        assert sort_history_by_relevance(once) == once

    def test_input_not_mutated(self, sample_history):
        original = list(sample_history)

        sort_history_by_relevance(sample_history)

        assert sample_history == original

    def test_more_visits_never_lowers_rank(self, make_record):
        others = [make_record(f"https://{i}.com", visit_count=i, days_ago=i) for i in range(1, 8)]
        target = make_record("https://target.com", visit_count=4, days_ago=3)
        boosted = make_record("https://target.com", visit_count=6, days_ago=3)

        rank_before = sort_history_by_relevance(others + [target]).index(target)
        rank_after = sort_history_by_relevance(others + [boosted]).index(boosted)

        assert rank_after <= rank_before

    def test_nan_timestamp_does_not_break_order(self, make_record):
        nan_record = make_record("https://nan.com", visit_count=2, last_visit_time=float("nan"))
        recent = make_record("https://recent.com", visit_count=2, days_ago=1)

        assert sort_history_by_relevance([nan_record, recent]) == [recent, nan_record]


class TestScoredRanking:
    def test_highest_score_first(self, sample_history):
        ranked = sort_by_relevance_with_keywords(sample_history, ["rust", "programming"], NOW)

        assert ranked[0].url == "https://www.rust-lang.org/learn"
        assert ranked[1].url == "https://doc.rust-lang.org/book/"

    def test_equal_scores_keep_input_order(self, make_record):
        a = make_record("https://a.com/x", "Same", 1, 100)
        b = make_record("https://b.com/x", "Same", 1, 100)

        assert sort_by_relevance_with_keywords([a, b], ["same"], NOW) == [a, b]
        assert sort_by_relevance_with_keywords([b, a], ["same"], NOW) == [b, a]

    def test_idempotent(self, sample_history):
        once = sort_by_relevance_with_keywords(sample_history, ["rust"], NOW)

        assert sort_by_relevance_with_keywords(once, ["rust"], NOW) == once

    def test_nan_reference_time_is_safe(self, sample_history):
        ranked = sort_by_relevance_with_keywords(sample_history, ["rust"], float("nan"))

        assert sorted(r.url for r in ranked) == sorted(r.url for r in sample_history)

    def test_empty_input(self):
        assert sort_by_relevance_with_keywords([], ["rust"], NOW) == []
