"""Configuration management for FinBuddy.

Reads configuration from ~/.config/finbuddy.toml and creates default config if needed.
"""

import os
import secrets
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    llm_enabled: bool = False
    llm_provider: Optional[str] = "openai"
    llm_openai_api_key: Optional[str] = None
    llm_openai_model: Optional[str] = None
    llm_timeout_seconds: float = 20.0
    jwt_secret: str = ""
    token_ttl_days: int = 7
    categorization_workers: int = 1
    assistant_transaction_window: int = 100
    assistant_insights_days: int = 30

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "finbuddy"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="finbuddy.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            jwt_secret=secrets.token_hex(32),
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "finbuddy.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional explicit path. Defaults to ~/.config/finbuddy.toml.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "finbuddy"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "finbuddy.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    llm_config = data.get("llm", {})
    auth_config = data.get("auth", {})
    categorization_config = data.get("categorization", {})
    assistant_config = data.get("assistant", {})

    jwt_secret = auth_config.get("jwt_secret", "")
    if not jwt_secret:
        raise ValueError(f"auth.jwt_secret is not set in {config_path}")

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        llm_enabled=llm_config.get("enabled", False),
        llm_provider=llm_config.get("provider", "openai"),
        llm_openai_api_key=(
            llm_config.get("openai_api_key") or os.environ.get("OPENAI_API_KEY")
        ),
        llm_openai_model=llm_config.get("openai_model"),
        llm_timeout_seconds=float(llm_config.get("timeout_seconds", 20.0)),
        jwt_secret=jwt_secret,
        token_ttl_days=int(auth_config.get("token_ttl_days", 7)),
        categorization_workers=int(categorization_config.get("workers", 1)),
        assistant_transaction_window=int(
            assistant_config.get("transaction_window", 100)
        ),
        assistant_insights_days=int(assistant_config.get("insights_days", 30)),
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination path.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # The API key is left out on purpose so it can come from $OPENAI_API_KEY
    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "llm": {
            "enabled": config.llm_enabled,
            "provider": config.llm_provider or "openai",
            "openai_model": config.llm_openai_model or "gpt-4o-mini",
            "timeout_seconds": config.llm_timeout_seconds,
        },
        "auth": {
            "jwt_secret": config.jwt_secret,
            "token_ttl_days": config.token_ttl_days,
        },
        "categorization": {
            "workers": config.categorization_workers,
        },
        "assistant": {
            "transaction_window": config.assistant_transaction_window,
            "insights_days": config.assistant_insights_days,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
