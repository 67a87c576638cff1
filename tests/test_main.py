"""Tests for the CLI run path."""

import json

import pytest

from news_pulse.main import run

_OFFLINE_CONFIG = """\
sources:
  headline: {enabled: false}
  video: {enabled: false}
  forum: {enabled: false}
  syndication: {enabled: false}
output:
  dir: saved_feeds
"""


@pytest.fixture
def offline_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.yaml"
    path.write_text(_OFFLINE_CONFIG, encoding="utf-8")
    return path


class TestRun:
    def test_save_uses_configured_output_dir(self, offline_config, tmp_path, capsys):
        assert run(config_path=str(offline_config), save=True) == 0
        out = tmp_path / "saved_feeds"
        assert (out / "feed.md").exists()
        data = json.loads((out / "feed.json").read_text(encoding="utf-8"))
        assert data["items"][0]["source_platform"] == "Fallback"
        assert "# News Pulse - general" in capsys.readouterr().out

    def test_output_dir_overrides_config(self, offline_config, tmp_path):
        run(config_path=str(offline_config), output_dir=str(tmp_path / "elsewhere"))
        assert (tmp_path / "elsewhere" / "feed.json").exists()
        assert not (tmp_path / "saved_feeds").exists()

    def test_no_files_without_save(self, offline_config, tmp_path):
        run(config_path=str(offline_config), as_json=True)
        assert not (tmp_path / "saved_feeds").exists()
