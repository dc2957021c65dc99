"""
Tests for sources/ — JSON directory sources and the content catalog.
"""

import asyncio
import json

from tclogger import logger

from documents.records import GuideItem
from sources.base import ContentSourceError, StaticContentSource
from sources.tests.fakes import FailingContentSource
from sources.catalog import ContentCatalog, ContentPools
from sources.json_dir import JsonDirSource, build_json_dir_sources


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


def test_json_dir_source_reads_files_in_name_order(tmp_path):
    logger.note("> Test: JsonDirSource reads objects and lists in file order")

    _write_json(tmp_path / "guides" / "b.json", {"slug": "b", "title": "B"})
    _write_json(
        tmp_path / "guides" / "a.json",
        [{"slug": "a1", "title": "A1"}, {"slug": "a2"}, "not a record"],
    )
    (tmp_path / "guides" / "notes.txt").write_text("ignored", encoding="utf-8")

    source = JsonDirSource("guide", tmp_path)
    records = asyncio.run(source.fetch())
    assert [r.slug for r in records] == ["a1", "a2", "b"]
    assert all(isinstance(r, GuideItem) for r in records)

    logger.success("  PASSED")


def test_json_dir_source_skips_broken_file(tmp_path):
    logger.note("> Test: a broken file is skipped, not fatal")

    _write_json(tmp_path / "columns" / "ok.json", {"slug": "ok"})
    (tmp_path / "columns" / "broken.json").write_text("{not json", encoding="utf-8")
    _write_json(tmp_path / "columns" / "scalar.json", 42)

    records = asyncio.run(JsonDirSource("column", tmp_path).fetch())
    assert [r.slug for r in records] == ["ok"]

    logger.success("  PASSED")


def test_json_dir_source_missing_directory(tmp_path):
    logger.note("> Test: missing directory fails unless allowed")

    strict = JsonDirSource("news", tmp_path)
    try:
        asyncio.run(strict.fetch())
    except ContentSourceError as e:
        logger.mesg(f"  * {e}")
    else:
        raise AssertionError("Expected ContentSourceError")

    lenient = JsonDirSource("news", tmp_path, allow_missing=True)
    assert asyncio.run(lenient.fetch()) == []

    sources = build_json_dir_sources(tmp_path)
    assert set(sources) == {"cars", "guide", "column", "heritage", "news"}
    assert sources["guide"].dir_path == tmp_path / "guides"

    logger.success("  PASSED")


def test_content_pools_published_and_sorted():
    logger.note("> Test: ContentPools keep published records, newest first")

    pools = ContentPools.from_records(
        {
            "guide": [
                GuideItem.from_dict({"slug": "old", "publishedAt": "2023-01-01"}),
                GuideItem.from_dict({"slug": "new", "publishedAt": "2024-01-01"}),
                GuideItem.from_dict({"slug": "draft", "status": "draft"}),
                GuideItem.from_dict({"title": "no slug"}),
                GuideItem.from_dict({"slug": "undated", "title": "Undated"}),
            ]
        }
    )
    assert [r.slug for r in pools.get("guide")] == ["new", "old", "undated"]
    assert pools.find("guide", "old").slug == "old"
    assert pools.find("guide", "draft") is None
    assert pools.get("cars") == ()
    assert len(pools) == 3

    logger.success("  PASSED")


def test_content_catalog_load():
    logger.note("> Test: ContentCatalog loads every source")

    catalog = ContentCatalog(
        {
            "guide": StaticContentSource("guide", [{"slug": "g1"}, {"slug": "g2"}]),
            "news": StaticContentSource("news", [{"id": "n1"}]),
        }
    )
    pools = asyncio.run(catalog.load(verbose=True))
    assert len(pools.get("guide")) == 2
    assert [r.slug for r in pools.get("news")] == ["n1"]

    logger.success("  PASSED")


def test_content_catalog_failure_propagates():
    logger.note("> Test: one failing source fails the catalog load")

    catalog = ContentCatalog(
        {
            "guide": StaticContentSource("guide", [{"slug": "g1"}]),
            "cars": FailingContentSource("cars", "disk unavailable"),
        }
    )
    try:
        asyncio.run(catalog.load())
    except ContentSourceError as e:
        assert "disk unavailable" in str(e)
    else:
        raise AssertionError("Expected ContentSourceError")

    try:
        ContentCatalog({"videos": StaticContentSource("guide", [])})
    except ValueError:
        pass
    else:
        raise AssertionError("Expected ValueError for unknown kind")

    logger.success("  PASSED")


if __name__ == "__main__":
    import tempfile

    from pathlib import Path

    for test_func in [
        test_json_dir_source_reads_files_in_name_order,
        test_json_dir_source_skips_broken_file,
        test_json_dir_source_missing_directory,
    ]:
        with tempfile.TemporaryDirectory() as tmp_dir:
            test_func(Path(tmp_dir))
    test_content_pools_published_and_sorted()
    test_content_catalog_load()
    test_content_catalog_failure_propagates()
    logger.success("\n✓ All sources tests passed")
