"""Tests for previews, manifests and text statistics."""

import json

from article_store import MetadataRegistry, PageStore
from article_store.loaders import build_article
from article_store.output import (
    article_manifest,
    build_preview,
    clean_html_to_text,
    manifest_json,
    reading_minutes,
    word_count,
)
from article_store.utils.settings import StoreSettings


class TestText:
    def test_strips_tags_and_entities(self):
        text = clean_html_to_text("<h2>Intro</h2><p>Fish &amp; chips<note>aside</note></p>")
        assert text == "Intro Fish & chips aside"

    def test_empty_input(self):
        assert clean_html_to_text(None) == ""
        assert clean_html_to_text("") == ""

    def test_word_count(self):
        assert word_count(["<p>one two</p>", "<p>three, don't stop</p>"]) == 5


class TestPreview:
    def test_preview_fields(self, valid_fields):
        registry = MetadataRegistry.create(valid_fields)
        preview = build_preview(registry, PageStore({10: "<p>short body</p>"}))
        assert preview.slug == valid_fields["slug"]
        assert preview.title == "Win32 revisited"
        assert preview.image_width == 442
        assert preview.image_alt == valid_fields["hero_image_caption"]
        assert preview.published_on == "2014-01-08"
        assert preview.reading_minutes == 1

    def test_alt_falls_back_to_subtitle(self, valid_fields):
        del valid_fields["hero_image_caption"]
        preview = build_preview(MetadataRegistry.create(valid_fields), PageStore())
        assert preview.image_alt == valid_fields["sub_title"]

    def test_reading_minutes(self):
        body = " ".join(["word"] * 450)
        assert reading_minutes(PageStore({1: body}), wpm=200) == 3
        assert reading_minutes(PageStore()) == 0

    def test_withdrawn_pages_not_counted(self):
        store = PageStore({1: "word"}, withdrawn={2: " ".join(["word"] * 1000)})
        assert reading_minutes(store, wpm=200) == 1


class TestManifest:
    def test_manifest_contents(self, valid_fields):
        article = build_article(valid_fields, {1: "<p>a b</p>", 26: "<p>c</p>"}, {40: "<p>draft</p>"})
        manifest = article_manifest(article, settings=StoreSettings(key_stride=10))
        assert manifest["slug"] == valid_fields["slug"]
        assert manifest["page_keys"] == [1, 26]
        assert manifest["withdrawn_keys"] == [40]
        assert manifest["next_key"] == 50
        assert manifest["word_count"] == 3
        assert manifest["metadata"]["published_on"] == "2014-01-08"

    def test_manifest_json_is_valid(self, valid_fields):
        article = build_article(valid_fields, {})
        payload = json.loads(manifest_json([article]))
        assert payload["articles"][0]["page_keys"] == []
        assert "generated_at" in payload
