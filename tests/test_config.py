import pytest
import tomli_w

from config import load_config


def test_creates_default_config(tmp_path):
    config_path = tmp_path / "finbuddy.toml"

    config = load_config(config_path)

    assert config_path.exists()
    assert config.llm_enabled is False
    assert len(config.jwt_secret) == 64
    assert config.db_filename == "finbuddy.db"

    reloaded = load_config(config_path)
    assert reloaded.jwt_secret == config.jwt_secret
    assert reloaded.assistant_transaction_window == 100
    assert reloaded.assistant_insights_days == 30


def test_loads_sections(tmp_path, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    config_path = tmp_path / "finbuddy.toml"
    config_path.write_bytes(
        tomli_w.dumps(
            {
                "base_dir": str(tmp_path / "data"),
                "database": {"filename": "custom.db"},
                "logging": {"level": "DEBUG"},
                "llm": {
                    "enabled": True,
                    "openai_api_key": "sk-test",
                    "openai_model": "gpt-4o",
                    "timeout_seconds": 5,
                },
                "auth": {"jwt_secret": "abc", "token_ttl_days": 1},
                "categorization": {"workers": 4},
                "assistant": {"transaction_window": 20, "insights_days": 7},
            }
        ).encode()
    )

    config = load_config(config_path)

    assert config.db_path == tmp_path / "data" / "db" / "custom.db"
    assert config.log_level == "DEBUG"
    assert config.llm_enabled is True
    assert config.llm_openai_api_key == "sk-test"
    assert config.llm_openai_model == "gpt-4o"
    assert config.llm_timeout_seconds == 5.0
    assert config.token_ttl_days == 1
    assert config.categorization_workers == 4
    assert config.assistant_transaction_window == 20
    assert config.assistant_insights_days == 7


def test_api_key_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    config_path = tmp_path / "finbuddy.toml"
    config_path.write_text('[auth]\njwt_secret = "abc"\n')

    assert load_config(config_path).llm_openai_api_key == "sk-env"


def test_missing_jwt_secret(tmp_path):
    config_path = tmp_path / "finbuddy.toml"
    config_path.write_text("[llm]\nenabled = false\n")

    with pytest.raises(ValueError):
        load_config(config_path)
