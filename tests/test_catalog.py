"""Tests for discovering and reloading a content root."""

import pytest
import yaml

from article_store import LoadError, NotFoundError, ValidationError
from article_store.catalog import ArticleCatalog, discover_article_dirs, load_article
from article_store.utils.settings import StoreSettings

from .test_php_import import _write_article


def _write_yaml(directory, fields, pages=None):
    directory.mkdir(parents=True, exist_ok=True)
    payload = {"metadata": fields, "pages": pages or {10: "<p>body</p>"}}
    (directory / "article.yaml").write_text(yaml.safe_dump(payload), encoding="utf-8")
    return directory


class TestLoadArticle:
    def test_prefers_yaml_source(self, tmp_path, valid_fields):
        directory = _write_article(tmp_path / "both")
        _write_yaml(directory, dict(valid_fields, slug="from-yaml"))
        assert load_article(directory).slug == "from-yaml"

    def test_falls_back_to_php(self, tmp_path):
        directory = _write_article(tmp_path / "legacy")
        assert load_article(directory).slug == "win32-revisited"

    def test_no_source(self, tmp_path):
        with pytest.raises(LoadError, match="no article source"):
            load_article(tmp_path)


class TestArticleCatalog:
    def test_discovers_nested_articles(self, tmp_path, valid_fields):
        _write_yaml(tmp_path / "cpp" / "first", dict(valid_fields, slug="first"))
        _write_article(tmp_path / "win32cpp" / "legacy")
        assert discover_article_dirs(tmp_path) == sorted(
            [tmp_path / "cpp" / "first", tmp_path / "win32cpp" / "legacy"]
        )
        catalog = ArticleCatalog(tmp_path).reload()
        assert catalog.slugs() == ["first", "win32-revisited"]
        assert len(catalog) == 2
        assert [a.slug for a in catalog] == ["first", "win32-revisited"]

    def test_get_unknown_slug(self, tmp_path, valid_fields):
        _write_yaml(tmp_path / "a", valid_fields)
        catalog = ArticleCatalog(tmp_path).reload()
        assert catalog.get(valid_fields["slug"]).pages.size() == 1
        with pytest.raises(NotFoundError):
            catalog.get("missing")

    def test_duplicate_slug_rejected(self, tmp_path, valid_fields):
        _write_yaml(tmp_path / "a", valid_fields)
        _write_yaml(tmp_path / "b", valid_fields)
        with pytest.raises(LoadError, match="already used"):
            ArticleCatalog(tmp_path).reload()

    def test_failed_reload_keeps_snapshot(self, tmp_path, valid_fields):
        _write_yaml(tmp_path / "a", valid_fields)
        catalog = ArticleCatalog(tmp_path).reload()
        before = catalog.snapshot()
        _write_yaml(tmp_path / "b", dict(valid_fields, slug="broken", synopsis=""))
        with pytest.raises(ValidationError):
            catalog.reload()
        assert catalog.snapshot() is before

    def test_reload_builds_new_instances(self, tmp_path, valid_fields):
        _write_yaml(tmp_path / "a", valid_fields)
        catalog = ArticleCatalog(tmp_path).reload()
        old = catalog.get(valid_fields["slug"])
        _write_yaml(tmp_path / "a", valid_fields, pages={10: "<p>one</p>", 20: "<p>two</p>"})
        catalog.reload()
        new = catalog.get(valid_fields["slug"])
        assert new is not old
        assert old.pages.size() == 1
        assert new.pages.size() == 2

    def test_root_from_settings(self, tmp_path):
        settings = StoreSettings(content_root_str=str(tmp_path))
        assert ArticleCatalog(settings=settings).root == tmp_path

    def test_missing_root(self, tmp_path):
        with pytest.raises(LoadError):
            ArticleCatalog(tmp_path / "nope").reload()
