"""Tests for .gitwiser.yaml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitwiser.config_loader import CONFIG_FILE, ConfigError, GitWiserConfig, load_config


def _write(tmp_path: Path, text: str) -> Path:
    (tmp_path / CONFIG_FILE).write_text(text)
    return tmp_path


class TestLoadConfig:

    def test_defaults_without_file(self, tmp_path: Path):
        config = load_config(tmp_path)
        assert config == GitWiserConfig()
        assert config.authors.threshold == 70
        assert config.authors.min_confidence == pytest.approx(0.7)
        assert config.authors.prefer_human_canonical is False
        assert config.authors.max_display_clusters == 10

    def test_empty_file_is_defaults(self, tmp_path: Path):
        assert load_config(_write(tmp_path, "")) == GitWiserConfig()

    def test_reads_authors_section(self, tmp_path: Path):
        config = load_config(_write(
            tmp_path,
            "authors:\n  threshold: 85\n  prefer_human_canonical: true\n",
        ))
        assert config.authors.threshold == 85
        assert config.authors.min_confidence == pytest.approx(0.85)
        assert config.authors.prefer_human_canonical is True
        assert config.authors.max_display_clusters == 10

    def test_threshold_out_of_range(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "authors:\n  threshold: 150\n"))

    def test_broken_yaml(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "authors: [unclosed\n"))

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "- just\n- a list\n"))

    def test_misspelled_key_is_rejected(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "authors:\n  threshhold: 85\n"))

    def test_unknown_section_is_rejected(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "author:\n  threshold: 85\n"))
