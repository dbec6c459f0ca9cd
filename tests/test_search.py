"""
Tests for filtering and stats aggregation.
"""
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from audioqueue.managers import filter_entries, matches, aggregate
from audioqueue.models import Entry, LibraryStats


class TestFilter:
    """Tests for free-text filtering."""

    def test_empty_query_returns_all_in_order(self, sample_entries):
        assert filter_entries(sample_entries, '') == sample_entries

    def test_matches_title_case_insensitive(self, sample_entries):
        result = filter_entries(sample_entries, 'dUnE')
        assert [e.title for e in result] == ['Dune']

    def test_matches_author(self, sample_entries):
        result = filter_entries(sample_entries, 'harari')
        assert [e.title for e in result] == ['Sapiens']

    def test_matches_category(self, sample_entries):
        result = filter_entries(sample_entries, 'podcast')
        assert [e.title for e in result] == ['Hardcore History']

    def test_substring_across_fields_preserves_order(self, sample_entries):
        """'history' hits one category and one title, in input order."""
        result = filter_entries(sample_entries, 'history')
        assert [e.id for e in result] == ['2', '1']

    def test_no_match(self, sample_entries):
        assert filter_entries(sample_entries, 'xyz') == []

    def test_query_not_trimmed(self, sample_entries):
        assert filter_entries(sample_entries, 'dune ') == []

    def test_empty_category_never_matches_category_term(self):
        entry = Entry(id='1', title='Untitled', author='Anon')
        assert not matches(entry, 'fiction')

    @pytest.mark.parametrize('query', ['', 'a', 'HER', 'o', 'zzz', ' '])
    def test_result_is_matching_subsequence(self, sample_entries, query):
        result = filter_entries(sample_entries, query)
        assert all(entry in sample_entries for entry in result)
        assert all(matches(entry, query) for entry in result)
        positions = [sample_entries.index(entry) for entry in result]
        assert positions == sorted(positions)

    def test_accepts_iterables(self, sample_entries):
        assert filter_entries(iter(sample_entries), '') == sample_entries


class TestAggregate:
    """Tests for status counts."""

    def test_empty(self):
        assert aggregate([]) == LibraryStats(total=0, to_listen=0, listening=0, completed=0)

    def test_counts_each_status(self, sample_entries):
        stats = aggregate(sample_entries)
        assert stats == LibraryStats(total=3, to_listen=1, listening=1, completed=1)

    def test_counts_sum_to_total(self, sample_entries):
        entries = sample_entries + [
            Entry(id=str(i), title='T', author='A', status='to-listen')
            for i in range(10, 14)
        ]
        stats = aggregate(entries)
        assert stats.to_listen + stats.listening + stats.completed == stats.total == len(entries)

    def test_unknown_status_raises(self):
        entry = Entry(id='1', title='T', author='A', status='paused')
        with pytest.raises(ValueError):
            aggregate([entry])
