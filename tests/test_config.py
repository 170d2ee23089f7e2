"""
Tests for run settings
"""
import pytest
from unittest.mock import patch
from config import ENV_VARS, ReportSettings


@pytest.fixture
def clean_env(monkeypatch):
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)


class TestReportSettings:
    def test_defaults(self, clean_env):
        with patch("config.load_dotenv"):
            settings = ReportSettings.from_env()
        assert settings.source == "csv"
        assert settings.top_n == 10
        assert settings.high_value_rank_cutoff == 10
        assert settings.large_order_threshold == 10
        assert settings.output_dir == "output"

    def test_from_env(self, clean_env):
        with patch.dict('os.environ', {
            'NORTHWIND_SOURCE': 'Snowflake',
            'TOP_N': '5',
            'LARGE_ORDER_THRESHOLD': '3',
            'REPORT_OUTPUT_DIR': '/tmp/reports',
        }), patch("config.load_dotenv"):
            settings = ReportSettings.from_env()
        assert settings.source == "snowflake"
        assert settings.top_n == 5
        assert settings.large_order_threshold == 3
        assert settings.output_dir == "/tmp/reports"

    def test_blank_values_ignored(self, clean_env):
        with patch.dict('os.environ', {'TOP_N': '  '}), patch("config.load_dotenv"):
            assert ReportSettings.from_env().top_n == 10

    def test_invalid_values_rejected(self, clean_env):
        with patch.dict('os.environ', {'HIGH_VALUE_RANK_CUTOFF': '0'}), patch("config.load_dotenv"):
            with pytest.raises(Exception):
                ReportSettings.from_env()

    def test_unknown_source_rejected(self):
        with pytest.raises(Exception):
            ReportSettings(source="parquet")
