"""Tests for the command line entrypoint."""

import json

import pytest

from article_store.main import main

from .test_php_import import _write_article


@pytest.fixture(autouse=True)
def _log_to_stderr(monkeypatch):
    monkeypatch.setenv("LOG_OUTPUT", "stderr")


class TestMain:
    def test_single_article_json(self, tmp_path, capsys):
        directory = _write_article(tmp_path / "legacy")
        assert main([str(directory), "--json", "--log-level", "WARNING"]) == 0
        payload = json.loads(capsys.readouterr().out)
        (entry,) = payload["articles"]
        assert entry["slug"] == "win32-revisited"
        assert entry["page_keys"] == [1, 10, 12]
        assert entry["withdrawn_keys"] == [11, 20, 21]

    def test_content_root(self, tmp_path, capsys):
        _write_article(tmp_path / "cpp" / "legacy")
        assert main([str(tmp_path), "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert len(payload["articles"]) == 1

    def test_load_failure_exit_code(self, tmp_path):
        _write_article(tmp_path / "broken", pages='<?php $PAGES = array(1 => ""); ?>')
        assert main([str(tmp_path / "broken")]) == 1

    def test_missing_root_exit_code(self, tmp_path):
        assert main([str(tmp_path / "nope")]) == 1

    @pytest.mark.parametrize("stride", ["0", "ten"])
    def test_invalid_stride_exit_code(self, tmp_path, monkeypatch, stride):
        monkeypatch.setenv("ARTICLE_KEY_STRIDE", stride)
        directory = _write_article(tmp_path / "legacy")
        assert main([str(directory)]) == 1
