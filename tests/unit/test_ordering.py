"""Tests for episode label ordering."""

import pytest

from md2tg.compose import ResourceEntry, episode_sort_key, sort_entries


@pytest.mark.unit
class TestEpisodeSortKey:
    """Tests for the sort key of single labels."""

    def test_numeric_label(self):
        assert episode_sort_key("03") == (0, 3, 0, "", "")
        assert episode_sort_key("3v2") == (0, 3, 0, "v2", "")

    def test_surrounding_whitespace_is_ignored(self):
        assert episode_sort_key("  12 ") == episode_sort_key("12")

    def test_special_attached_to_its_number(self):
        assert episode_sort_key("SP1", {1}) == (0, 1, 1, "", "sp1")

    def test_special_without_numeric_label(self):
        assert episode_sort_key("OVA 2", {1}) == (1, 2, 0, "", "ova 2")

    @pytest.mark.parametrize("label", ["SP1", "sp1", "Special_1", "OAD-1", "ova.1"])
    def test_special_markers(self, label):
        assert episode_sort_key(label, {1})[:3] == (0, 1, 1)

    @pytest.mark.parametrize("label", ["Batch", "Movie", "SPX", ""])
    def test_other_labels(self, label):
        assert episode_sort_key(label) == (2, 0, 0, "", "")


@pytest.mark.unit
class TestSortEntries:
    """Tests for ordering whole listings."""

    def test_numeric_then_orphan_special(self):
        assert sort_entries(["10", "3v2", "3", "SP1"]) == ["3", "3v2", "10", "SP1"]

    def test_numbers_compare_numerically(self):
        assert sort_entries(["10", "9", "100", "01"]) == ["01", "9", "10", "100"]

    def test_special_follows_matching_number(self):
        assert sort_entries(["2", "SP1", "1", "3"]) == ["1", "SP1", "2", "3"]

    def test_specials_with_same_number_are_alphabetical(self):
        assert sort_entries(["OVA1", "1", "SP1"]) == ["1", "OVA1", "SP1"]

    def test_orphan_specials_ordered_by_number(self):
        assert sort_entries(["SP3", "1", "OVA2"]) == ["1", "OVA2", "SP3"]

    def test_other_labels_keep_their_order_at_the_end(self):
        assert sort_entries(["Movie", "2", "Batch", "1", "Extras"]) == ["1", "2", "Movie", "Batch", "Extras"]

    def test_resource_entries(self):
        entries = [ResourceEntry("02", "https://t.me/c/1/2"), ResourceEntry("01"), ResourceEntry("SP1")]
        ordered = sort_entries(entries)
        assert [entry.label for entry in ordered] == ["01", "SP1", "02"]
        assert ordered[2].url == "https://t.me/c/1/2"

    def test_input_is_not_modified(self):
        labels = ["2", "1"]
        sort_entries(labels)
        assert labels == ["2", "1"]

    def test_empty(self):
        assert sort_entries([]) == []
