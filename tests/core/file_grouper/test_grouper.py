"""Tests for batch grouping."""

import pytest

from mediamatch.config.models.matching_settings import DetectionSettings
from mediamatch.core.file_grouper import BatchGrouper
from mediamatch.core.file_grouper.grouper import split_query
from mediamatch.core.models import MediaFile
from mediamatch.shared.errors import InvalidQueryError


def _file(path):
    return MediaFile.of(path)


@pytest.fixture
def grouper():
    return BatchGrouper()


class TestSplitQuery:
    def test_alternatives(self):
        assert split_query("Office | The Office|") == ["Office", "The Office"]

    def test_blank(self):
        assert split_query(" | ") == []


class TestExplicitQuery:
    """An explicit query puts every file in one group."""

    def test_single_group(self, grouper):
        files = [_file("/tv/a/x.S01E01.mkv"), _file("/tv/b/y.S01E02.mkv")]

        groups = grouper.group(files, query="Office|The Office")

        assert list(groups) == ["office|the office"]
        group = groups["office|the office"]
        assert group.files == files
        assert group.queries == ["Office", "The Office"]
        assert group.evidence.selected_matcher == "query"

    def test_blank_query_rejected(self, grouper):
        with pytest.raises(InvalidQueryError):
            grouper.group([_file("/tv/a.mkv")], query="  |  ")


class TestInferredGroups:
    """Groups inferred from names and folders."""

    def test_confident_name_spans_folders(self, grouper):
        files = [_file("/tv/a/Show.Name.S01E01.mkv"), _file("/tv/b/show.name.s01e02.mkv")]

        groups = grouper.group(files)

        assert list(groups) == ["show name"]
        assert groups["show name"].files == files
        assert groups["show name"].evidence.confident

    def test_short_name_scoped_to_folder(self, grouper):
        files = [_file("/tv/a/Lost.S01E01.mkv"), _file("/tv/b/Lost.S01E02.mkv")]

        groups = grouper.group(files)

        assert list(groups) == ["lost [/tv/a]", "lost [/tv/b]"]
        assert groups["lost [/tv/a]"].queries == ["Lost"]
        assert not groups["lost [/tv/b]"].evidence.confident

    def test_min_common_words_configurable(self):
        grouper = BatchGrouper(settings=DetectionSettings(min_common_words=0))
        files = [_file("/tv/a/Lost.S01E01.mkv"), _file("/tv/b/Lost.S01E02.mkv")]

        assert list(grouper.group(files)) == ["lost"]

    def test_folder_fallback(self, grouper):
        files = [
            _file("/tv/Nature Docs/clip_a.mkv"),
            _file("/tv/Nature Docs/clip_b.mkv"),
            _file("/tv/Other/clip_c.mkv"),
        ]

        groups = grouper.group(files)

        assert list(groups) == ["/tv/Nature Docs", "/tv/Other"]
        group = groups["/tv/Nature Docs"]
        assert group.title == "Nature Docs"
        assert group.queries == ["Nature Docs"]
        assert group.evidence.selected_matcher == "folder"

    def test_common_word_sequence_anchors(self, grouper):
        names = [
            "Nature.Docs.Oceans.mkv",
            "Nature.Docs.Forests.mkv",
            "Nature.Docs.Deserts.mkv",
            "City.Lights.Tokyo.mkv",
            "city.lights.Paris.mkv",
        ]
        files = [_file(f"/docs/{name}") for name in names]

        groups = grouper.group(files)

        assert list(groups) == ["nature docs", "city lights"]
        assert len(groups["nature docs"].files) == 3
        assert groups["city lights"].title == "City Lights"
        assert "Common word sequence" in groups["city lights"].evidence.explanation

    def test_grouping_is_deterministic(self, grouper):
        files = [
            _file("/tv/a/Show.Name.S01E01.mkv"),
            _file("/tv/a/Lost.S01E01.mkv"),
            _file("/tv/c/random.mkv"),
            _file("/tv/b/Show.Name.S01E02.mkv"),
        ]

        first = grouper.group(files)
        second = grouper.group(files)

        assert list(first) == list(second)
        assert [g.files for g in first.values()] == [g.files for g in second.values()]
        assert list(first) == ["show name", "lost [/tv/a]", "/tv/c"]

    def test_to_dict(self, grouper):
        groups = grouper.group([_file("/tv/a/Show.Name.S01E01.mkv")])
        data = groups["show name"].to_dict()
        assert data["file_count"] == 1
        assert data["evidence"]["selected_matcher"] == "series_name"
