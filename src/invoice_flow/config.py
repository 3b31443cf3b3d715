"""Configuration management using pydantic-settings."""

import tomllib
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OUTPUT = "./output"
DEFAULT_STATE_FILE = ".state/invoice-sequence.json"
DEFAULT_QUOTE_SCALE = 1.26
CONFIG_PATH = Path("~/.config/invoice-flow/config.toml").expanduser()


class PathsConfig(BaseSettings):
    output: Path = Path(DEFAULT_OUTPUT)
    state_file: Path = Path(DEFAULT_STATE_FILE)

    @field_validator("output", "state_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()


class RenderConfig(BaseSettings):
    """PDF layout options."""

    page_size: str = "A4"
    quote_scale: float = DEFAULT_QUOTE_SCALE

    @field_validator("page_size")
    @classmethod
    def upper_page_size(cls, v: str) -> str:
        v = v.upper()
        if v not in ("A4", "LETTER"):
            raise ValueError(f"Unsupported page size: {v}")
        return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INVOICE_FLOW_", env_nested_delimiter="__")

    paths: PathsConfig = PathsConfig()
    render: RenderConfig = RenderConfig()


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        paths = PathsConfig(**data.get("paths", {}))
        render = RenderConfig(**data.get("render", {}))
        return Settings(paths=paths, render=render)

    return Settings()
