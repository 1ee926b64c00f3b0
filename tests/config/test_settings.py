"""Tests for pos_config: YAML loading, environment overrides, and bridges."""

import textwrap

import pytest
import yaml

from pos_config import DEFAULT_SETTINGS_FILE, get_settings
from pos_config.bridges import build_checkout_service, build_engine
from pos_config.loader import apply_env_overrides, parse_bool, parse_int, parse_settings
from pos_config.schema import DEFAULT_DATABASE_URL, DatabaseSettings, PosSettings
from pos_kernel.db.engine import create_session_factory
from pos_kernel.domain.dtos import OversellPolicy


def _write(tmp_path, body: str):
    path = tmp_path / "settings.yaml"
    path.write_text(textwrap.dedent(body))
    return path


class TestBundledDefaults:

    def test_bundled_file_parses(self):
        settings = get_settings(DEFAULT_SETTINGS_FILE, environ={})
        assert settings.database.url == DEFAULT_DATABASE_URL
        assert settings.checkout.oversell_policy is OversellPolicy.REJECT
        assert settings.checkout.lock_rows is True
        assert settings.log_level == "INFO"

    def test_bundled_matches_dataclass_defaults(self):
        assert get_settings(DEFAULT_SETTINGS_FILE, environ={}) == PosSettings()

    def test_config_file_from_environment(self, tmp_path):
        path = _write(tmp_path, """
            checkout:
              oversell_policy: allow_backorder
        """)
        settings = get_settings(environ={"POS_CONFIG_FILE": str(path)})
        assert settings.checkout.oversell_policy is OversellPolicy.ALLOW_BACKORDER


class TestYamlFile:

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = _write(tmp_path, """
            database:
              url: sqlite:///pos.db
              pool_size: 5
        """)
        settings = get_settings(path, environ={})
        assert settings.database.url == "sqlite:///pos.db"
        assert settings.database.pool_size == 5
        assert settings.database.max_overflow == 10
        assert settings.checkout.lock_rows is True

    def test_empty_file(self, tmp_path):
        path = _write(tmp_path, "")
        assert get_settings(path, environ={}) == PosSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_settings(tmp_path / "nope.yaml", environ={})

    def test_malformed_yaml(self, tmp_path):
        path = _write(tmp_path, "database: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            get_settings(path, environ={})

    def test_top_level_must_be_mapping(self, tmp_path):
        path = _write(tmp_path, "- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            get_settings(path, environ={})

    def test_unknown_key(self, tmp_path):
        path = _write(tmp_path, """
            checkout:
              oversel_policy: reject
        """)
        with pytest.raises(ValueError, match="oversel_policy"):
            get_settings(path, environ={})

    def test_bad_policy(self, tmp_path):
        path = _write(tmp_path, """
            checkout:
              oversell_policy: sometimes
        """)
        with pytest.raises(ValueError, match="oversell_policy"):
            get_settings(path, environ={})

    @pytest.mark.parametrize("raw", ["true", "twenty", "2.5"])
    def test_bad_pool_value_names_key(self, tmp_path, raw):
        path = _write(tmp_path, f"""
            database:
              pool_timeout: {raw}
        """)
        with pytest.raises(ValueError, match=r"database\.pool_timeout"):
            get_settings(path, environ={})

    def test_quoted_pool_value_accepted(self, tmp_path):
        path = _write(tmp_path, """
            database:
              max_overflow: "15"
        """)
        assert get_settings(path, environ={}).database.max_overflow == 15

    def test_negative_pool_size(self):
        with pytest.raises(ValueError, match="pool_size"):
            DatabaseSettings(pool_size=-1)


class TestEnvironmentOverrides:

    def test_overrides_win(self, tmp_path):
        path = _write(tmp_path, """
            database:
              url: postgresql+psycopg2://file/db
            checkout:
              oversell_policy: reject
              lock_rows: true
            log_level: INFO
        """)
        settings = get_settings(path, environ={
            "POS_DATABASE_URL": "sqlite://",
            "POS_OVERSELL_POLICY": "ALLOW_BACKORDER",
            "POS_LOCK_ROWS": "no",
            "POS_LOG_LEVEL": "debug",
        })
        assert settings.database.url == "sqlite://"
        assert settings.checkout.oversell_policy is OversellPolicy.ALLOW_BACKORDER
        assert settings.checkout.lock_rows is False
        assert settings.log_level == "DEBUG"

    def test_empty_values_ignored(self):
        merged = apply_env_overrides({"database": {"url": "x"}}, {"POS_DATABASE_URL": ""})
        assert merged["database"]["url"] == "x"

    def test_does_not_mutate_input(self):
        data = {"checkout": {"lock_rows": True}}
        apply_env_overrides(data, {"POS_LOCK_ROWS": "false"})
        assert data == {"checkout": {"lock_rows": True}}

    def test_bad_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            parse_settings({"log_level": "LOUD"})

    @pytest.mark.parametrize(
        "raw, expected",
        [("1", True), ("TRUE", True), ("on", True), ("0", False), ("Off", False), (False, False)],
    )
    def test_parse_bool(self, raw, expected):
        assert parse_bool(raw, "k") is expected

    def test_parse_bool_rejects_garbage(self):
        with pytest.raises(ValueError, match="k"):
            parse_bool("maybe", "k")

    @pytest.mark.parametrize("raw, expected", [(5, 5), ("7", 7), (" 30 ", 30)])
    def test_parse_int(self, raw, expected):
        assert parse_int(raw, "k") == expected

    @pytest.mark.parametrize("raw", [True, False, "1.0", None])
    def test_parse_int_rejects(self, raw):
        with pytest.raises(ValueError, match="database.pool_size"):
            parse_int(raw, "database.pool_size")


class TestBridges:

    def test_checkout_service_uses_configured_policy(self):
        settings = parse_settings({
            "database": {"url": "sqlite://"},
            "checkout": {"oversell_policy": "allow_backorder", "lock_rows": False},
        })
        engine = build_engine(settings)
        try:
            service = build_checkout_service(settings, create_session_factory(engine))
            assert service.oversell_policy is OversellPolicy.ALLOW_BACKORDER
        finally:
            engine.dispose()

    def test_engine_uses_configured_url(self):
        settings = parse_settings({"database": {"url": "sqlite://"}})
        engine = build_engine(settings)
        try:
            assert engine.dialect.name == "sqlite"
        finally:
            engine.dispose()
