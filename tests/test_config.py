"""Tests for adapter settings and run configuration."""

import pytest

from erp_migration.config import AdapterSettings, RunConfig
from erp_migration.errors import InforError
from erp_migration.models.migration import SourceMode


class TestAdapterSettings:
    def test_defaults(self):
        settings = AdapterSettings()
        assert settings.product == "LN"
        assert settings.mode == SourceMode.MOCK
        assert not settings.has_database

    def test_from_env(self):
        settings = AdapterSettings.from_env({
            "PRODUCT": "m3",
            "MODE": "LIVE",
            "COMPANY": "200",
            "DIVISION": "AAA",
            "DB_TYPE": "DB2",
            "DB_PORT": "50001",
            "ION_TIMEOUT": "12.5",
        })
        assert settings.product == "M3"
        assert settings.mode == SourceMode.LIVE
        assert settings.division == "AAA"
        assert settings.db_type == "db2"
        assert settings.db_port == 50001
        assert settings.timeout == 12.5
        assert settings.has_database

    def test_secrets_not_serialized(self):
        settings = AdapterSettings(ion_token="secret", db_password="hunter2")
        data = settings.to_dict()
        assert "ion_token" not in data
        assert "db_password" not in data

    def test_from_dict(self):
        settings = AdapterSettings.from_dict({"product": "lawson", "data_area": "TEST", "company": 7})
        assert settings.product == "LAWSON"
        assert settings.data_area == "TEST"
        assert settings.company == "7"

    @pytest.mark.parametrize("kwargs", [{"product": "SAP"}, {"mode": "hybrid"}])
    def test_invalid(self, kwargs):
        with pytest.raises(InforError) as exc_info:
            AdapterSettings(**kwargs)
        assert exc_info.value.code == "INFOR_CONFIG"

    def test_bad_port(self):
        with pytest.raises(InforError) as exc_info:
            AdapterSettings.from_env({"DB_PORT": "abc"})
        assert exc_info.value.details["setting"] == "DB_PORT"


class TestRunConfig:
    def test_defaults_from_empty_env(self):
        config = RunConfig.from_env({})
        assert config.batch_size == 100
        assert config.max_concurrency == 8
        assert config.parallel is True
        assert config.load_error_rate == 0.0
        assert config.dry_run is False
        assert config.log_level == "INFO"

    def test_from_env(self):
        config = RunConfig.from_env({
            "MIGRATION_BATCH_SIZE": "25",
            "MIGRATION_CONCURRENCY": "2",
            "MIGRATION_PARALLEL": "false",
            "LOAD_ERROR_RATE": "0.1",
            "TARGET_URL": "https://target.example.com",
            "DRY_RUN": "yes",
            "LOG_LEVEL": "debug",
        })
        assert config.batch_size == 25
        assert config.max_concurrency == 2
        assert config.parallel is False
        assert config.load_error_rate == 0.1
        assert config.dry_run is True
        assert config.log_level == "DEBUG"
        assert config.to_dict()["target_url"] == "https://target.example.com"

    @pytest.mark.parametrize("kwargs", [
        {"batch_size": 0},
        {"max_concurrency": 0},
        {"load_error_rate": 1.5},
        {"log_level": "LOUD"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(InforError):
            RunConfig(**kwargs)

    def test_from_dict(self):
        config = RunConfig.from_dict({"batch_size": "10", "parallel": "0"})
        assert config.batch_size == 10
        assert config.parallel is False
