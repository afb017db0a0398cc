"""Unit tests for configuration loading"""

import logging

import pytest
import yaml

from catalog_matcher.config.config_loader import format_config, load_config
from catalog_matcher.models.configs import MatcherConfig, MatchThresholds

SAMPLE_CONFIG = """
thresholds:
  ok_threshold: 0.92
  review_threshold: 0.70
  gap_threshold: 0.10
  scan_cap: 800
"""


@pytest.fixture
def config_file(tmp_path):
    """Write a sample config file"""
    path = tmp_path / "matcher_config.yaml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path


class TestConfigLoader:
    """Test suite for configuration loading"""

    @pytest.mark.unit
    def test_load_config_basic(self, config_file):
        """Test loading thresholds from a YAML file"""
        config = load_config(config_file, environ={})

        assert isinstance(config, MatcherConfig)
        assert config.thresholds.ok_threshold == 0.92
        assert config.thresholds.review_threshold == 0.70
        assert config.thresholds.gap_threshold == 0.10
        assert config.thresholds.scan_cap == 800
        # Not in the file, so the default applies
        assert config.thresholds.missing_qty_confidence_cap == 0.70
        assert config.thresholds.candidate_limit == 5

    @pytest.mark.unit
    def test_environment_overrides_file(self, config_file):
        """Test MATCH_* environment variables"""
        environ = {
            "MATCH_OK_THRESHOLD": "0.95",
            "MATCH_SCAN_CAP": "200",
            "MATCH_CANDIDATE_LIMIT": " 3 ",
        }

        config = load_config(config_file, environ=environ)

        assert config.thresholds.ok_threshold == 0.95
        assert config.thresholds.scan_cap == 200
        assert config.thresholds.candidate_limit == 3
        assert config.thresholds.review_threshold == 0.70

    @pytest.mark.unit
    def test_invalid_environment_value_ignored(self, config_file, caplog):
        """Test that unparseable overrides are logged and skipped"""
        environ = {"MATCH_GAP_THRESHOLD": "wide", "MATCH_SCAN_CAP": "1.5", "MATCH_OK_THRESHOLD": ""}

        with caplog.at_level(logging.WARNING):
            config = load_config(config_file, environ=environ)

        assert config.thresholds.gap_threshold == 0.10
        assert config.thresholds.scan_cap == 800
        assert config.thresholds.ok_threshold == 0.92
        assert "MATCH_GAP_THRESHOLD" in caplog.text
        assert "MATCH_SCAN_CAP" in caplog.text

    @pytest.mark.unit
    def test_min_valid_qty_override(self, config_file):
        """Test the minimum valid quantity from the environment"""
        config = load_config(config_file, environ={"MATCH_MIN_VALID_QTY": "1"})

        assert config.thresholds.min_valid_qty == 1.0

    @pytest.mark.unit
    def test_candidate_limit_above_five_rejected(self, config_file):
        """Test that results can never carry more than five candidates"""
        with pytest.raises(ValueError):
            load_config(config_file, environ={"MATCH_CANDIDATE_LIMIT": "8"})

        with pytest.raises(ValueError):
            MatchThresholds(candidate_limit=8)

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """Test that an explicit missing path is an error"""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml", environ={})

    @pytest.mark.unit
    def test_not_a_mapping(self, tmp_path):
        """Test that a YAML list is rejected"""
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path, environ={})

    @pytest.mark.unit
    def test_review_above_ok_rejected(self, config_file):
        """Test threshold order validation"""
        with pytest.raises(ValueError):
            load_config(config_file, environ={"MATCH_REVIEW_THRESHOLD": "0.95"})

    @pytest.mark.unit
    def test_out_of_range_rejected(self, config_file):
        """Test that thresholds outside [0, 1] are rejected"""
        with pytest.raises(ValueError):
            load_config(config_file, environ={"MATCH_OK_THRESHOLD": "1.5"})

    @pytest.mark.unit
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        """Test built-in defaults when no config file exists"""
        monkeypatch.chdir(tmp_path)

        config = load_config(environ={})

        assert config.thresholds == MatchThresholds()
        assert config.thresholds.ok_threshold == 0.90
        assert config.thresholds.review_threshold == 0.72
        assert config.thresholds.gap_threshold == 0.08
        assert config.thresholds.scan_cap == 1500

    @pytest.mark.unit
    def test_default_path(self, tmp_path, monkeypatch):
        """Test that config/matcher_config.yaml is picked up"""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "matcher_config.yaml").write_text(SAMPLE_CONFIG, encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        config = load_config(environ={})

        assert config.thresholds.scan_cap == 800

    @pytest.mark.unit
    def test_empty_file(self, tmp_path):
        """Test that an empty file means defaults"""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path, environ={}) == MatcherConfig()


class TestFormatConfig:
    """Test suite for config formatting"""

    @pytest.mark.unit
    def test_format_config(self, config_file):
        """Test YAML output of a loaded config"""
        config = load_config(config_file, environ={})

        data = yaml.safe_load(format_config(config))

        assert data["thresholds"]["ok_threshold"] == 0.92
        assert data["thresholds"]["scan_cap"] == 800
        assert MatcherConfig(**data) == config
