"""Tests for composer input documents."""

from datetime import datetime

import pytest

from md2tg.compose import AnimeDocument, Field, ReleaseUpdate, ResourceEntry
from md2tg.exceptions import ValidationError


@pytest.mark.unit
class TestAnimeDocument:
    """Tests for :class:`AnimeDocument`."""

    def test_defaults(self):
        doc = AnimeDocument(title="Show")
        assert doc.fields == ()
        assert doc.resource_groups == {}
        assert doc.tags == ()
        assert not doc.has_resources

    def test_collections_are_normalized(self):
        doc = AnimeDocument(
            title="Show",
            fields=[{"label": "Episodes", "value": 12}],
            resource_groups={"Subs": ["01", {"label": "02", "url": "https://t.me/c/1/2"}]},
            tags="Drama",
        )
        assert doc.fields == (Field("Episodes", "12"),)
        assert doc.resource_groups == {"Subs": (ResourceEntry("01"), ResourceEntry("02", "https://t.me/c/1/2"))}
        assert doc.tags == ("Drama",)

    def test_fields_from_mapping(self):
        doc = AnimeDocument(title="Show", fields={"Studio": "Madhouse", "Air day": None})
        assert doc.fields == (Field("Studio", "Madhouse"), Field("Air day", ""))

    def test_has_resources_ignores_empty_groups(self):
        assert not AnimeDocument(title="Show", resource_groups={"Subs": []}).has_resources
        assert AnimeDocument(title="Show", resource_groups={"Subs": ["1"]}).has_resources

    def test_from_dict(self):
        doc = AnimeDocument.from_dict(
            {
                "title": "Frieren",
                "nsfw": False,
                "summary-detail-url": "https://example.com/1",
                "title_tag": "2023年10月",
                "fields": [{"label": "Score", "value": "9.1", "url": "https://example.com/stats"}],
                "resource-groups": {"Subs": [1, 2]},
                "tags": ["Fantasy"],
            }
        )
        assert doc.summary_detail_url == "https://example.com/1"
        assert doc.title_tag == "2023年10月"
        assert doc.fields[0].url == "https://example.com/stats"
        assert [entry.label for entry in doc.resource_groups["Subs"]] == ["1", "2"]

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"title": ""},
            {"title": "   "},
            {"title": 5},
            {"title": "Show", "fields": "Episodes"},
            {"title": "Show", "fields": [{"value": "12"}]},
            {"title": "Show", "fields": [3]},
            {"title": "Show", "resource_groups": ["01"]},
            {"title": "Show", "resource_groups": {"Subs": "01"}},
            {"title": "Show", "resource_groups": {"Subs": [{"url": "https://x.org"}]}},
            {"title": "Show", "resource_groups": {"Subs": [1.5]}},
        ],
    )
    def test_from_dict_errors(self, data):
        with pytest.raises(ValidationError):
            AnimeDocument.from_dict(data)

    def test_from_dict_requires_mapping(self):
        with pytest.raises(ValidationError):
            AnimeDocument.from_dict(["Frieren"])

    def test_frozen(self):
        doc = AnimeDocument(title="Show")
        with pytest.raises(AttributeError):
            doc.title = "Other"


@pytest.mark.unit
class TestReleaseUpdate:
    """Tests for :class:`ReleaseUpdate`."""

    def test_display_name(self):
        assert ReleaseUpdate(title="t", original_name="Original").display_name == "Original"
        assert ReleaseUpdate(title="t", original_name="Original", localized_name="Local").display_name == "Local"

    def test_from_dict(self):
        published = datetime(2024, 1, 1, 12, 0)
        update = ReleaseUpdate.from_dict(
            {
                "title": "Show - 01",
                "original-name": "Show",
                "publishers": "Subs",
                "published_at": published,
                "info_link": "https://t.me/c/1/2",
            }
        )
        assert update.publishers == ("Subs",)
        assert update.published_at == published
        assert update.localized_name == ""
        assert update.info_link == "https://t.me/c/1/2"

    @pytest.mark.parametrize("data", [{"title": "Show - 01"}, {"original_name": "Show"}, "Show"])
    def test_from_dict_errors(self, data):
        with pytest.raises(ValidationError):
            ReleaseUpdate.from_dict(data)
