"""
==============================================================================
Classifier Tests
==============================================================================

Tests for the pure classification of accepted frequency tables.

==============================================================================
"""

import pytest

from scan_aggregator.scanner import classify_codes


def statuses(classification):
    return {entry.code: entry.status for entry in classification.entries}


class TestDegenerateTables:
    """Tests for empty and single-code tables."""

    def test_empty_table(self):
        """Test empty table yields no entries and keeps scanning."""
        result = classify_codes({})
        assert result.entries == []
        assert result.should_stop is False

    def test_single_code_below_threshold_waits(self):
        """Test a lone code seen five times is still waiting."""
        result = classify_codes({"012345678905": 5})
        assert statuses(result) == {"012345678905": "waiting"}
        assert result.should_stop is False

    def test_single_code_converges(self):
        """Test a lone code seen six times is perfect and stops."""
        result = classify_codes({"012345678905": 6})
        assert statuses(result) == {"012345678905": "perfect"}
        assert result.entries[0].count == 6
        assert result.should_stop is True

    def test_custom_perfect_threshold(self):
        """Test the convergence count is configurable."""
        result = classify_codes({"A": 3}, perfect_min_count=3)
        assert statuses(result) == {"A": "perfect"}
        assert result.should_stop is True


class TestClustering:
    """Tests for the stddev-based cluster cutoff."""

    def test_two_cluster_separation(self):
        """Test a dominant code separates from a stray read."""
        result = classify_codes({"A": 10, "B": 1})
        # stddev 4.5, cutoff 3.25
        assert statuses(result) == {"A": "single", "B": "garbage-2"}
        assert result.should_stop is True

    def test_multi_member_cluster_keeps_scanning(self):
        """Test two close leaders form a cluster and scanning continues."""
        result = classify_codes({"A": 10, "B": 9, "C": 1})
        assert statuses(result) == {"A": "cluster", "B": "cluster", "C": "garbage-2"}
        assert result.should_stop is False

    def test_garbage_tiers(self):
        """Test garbage tier grows with distance from the leading count."""
        result = classify_codes({"A": 12, "B": 6, "C": 5, "D": 1})
        # stddev sqrt(15.5)
        assert statuses(result) == {
            "A": "single",
            "B": "garbage-1",
            "C": "garbage-1",
            "D": "garbage-2",
        }
        assert result.should_stop is True

    def test_low_leading_count_waits(self):
        """Test clustering needs the leading count to reach six."""
        result = classify_codes({"A": 5, "B": 1})
        assert set(statuses(result).values()) == {"waiting"}
        assert result.should_stop is False

    def test_spread_must_exceed_one(self):
        """Test a stddev of exactly one is not enough to cluster."""
        result = classify_codes({"A": 6, "B": 4})
        assert set(statuses(result).values()) == {"waiting"}
        assert result.should_stop is False

    def test_small_spread_waits(self):
        """Test close counts wait for more signal."""
        result = classify_codes({"A": 6, "B": 5})
        assert set(statuses(result).values()) == {"waiting"}


class TestRanking:
    """Tests for ranking and determinism."""

    def test_tie_broken_by_code(self):
        """Test equal counts rank lexicographically."""
        result = classify_codes({"222": 3, "111": 3})
        assert [entry.code for entry in result.entries] == ["111", "222"]

    def test_count_descending(self):
        """Test higher counts rank first."""
        result = classify_codes({"A": 1, "B": 4, "C": 2, "D": 4})
        assert [entry.code for entry in result.entries] == ["B", "D", "C", "A"]

    @pytest.mark.parametrize("order", [
        ["A", "B", "C", "D"],
        ["D", "C", "B", "A"],
        ["C", "A", "D", "B"],
    ])
    def test_insertion_order_independent(self, order):
        """Test the result depends only on the table contents."""
        counts = {"A": 12, "B": 6, "C": 5, "D": 1}
        reordered = {code: counts[code] for code in order}
        assert classify_codes(reordered) == classify_codes(counts)

    def test_arrival_order_does_not_move_tier_boundary(self):
        """Test a tier on an exact floor boundary is the same in any arrival order."""
        counts = {
            "c0": 7, "c1": 29, "c2": 25, "c3": 3, "c4": 13,
            "c5": 17, "c6": 23, "c7": 5, "c8": 16,
        }
        order = ["c1", "c0", "c8", "c3", "c5", "c4", "c7", "c6", "c2"]
        reordered = {code: counts[code] for code in order}

        assert statuses(classify_codes(reordered)) == statuses(classify_codes(counts))
        assert classify_codes(reordered) == classify_codes(counts)

    def test_count_equal_to_cutoff_is_in_cluster(self):
        """Test the cutoff is inclusive."""
        # mean 5, stddev 2, cutoff 8 - 1.5 * 2 == 5
        result = classify_codes({"A": 8, "B": 6, "C": 6, "D": 5, "E": 3, "F": 2})
        assert statuses(result) == {
            "A": "cluster",
            "B": "cluster",
            "C": "cluster",
            "D": "cluster",
            "E": "garbage-2",
            "F": "garbage-3",
        }
        assert result.should_stop is False

    def test_recompute_is_idempotent(self):
        """Test repeated classification yields equal results."""
        counts = {"A": 10, "B": 9, "C": 1}
        assert classify_codes(counts) == classify_codes(counts)
