import logging
import tomllib
from pathlib import Path
from typing import Annotated, Literal

import tomlkit
from pydantic import BaseModel, Field, PlainSerializer
from pydantic_settings import BaseSettings, SettingsConfigDict

from flashpool.logging import logger

CONFIG_DIR = Path.home() / ".config" / "flashpool"
CONFIG_FILE = CONFIG_DIR / "config.toml"
DB_PATH = CONFIG_DIR / "flashpool.db"

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DatabaseSettings(BaseModel):
    # Serialize the path as a string representation of the absolute path
    path: Annotated[
        Path,
        PlainSerializer(lambda path: str(path.absolute()), return_type=str),
    ] = DB_PATH


class LoggingSettings(BaseModel):
    level: LogLevel = "INFO"


class HostSettings(BaseModel):
    max_call_depth: int = Field(default=32, gt=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FLASHPOOL_",
        env_nested_delimiter="__",
    )

    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    host: HostSettings = HostSettings()


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(),
        ),
    )
    logger.info(f"Saved configuration file at {config_path}.")


def apply_logging_settings(config: Settings) -> None:
    logger.setLevel(logging.getLevelNamesMapping()[config.logging.level])


settings = load_config_from_file(CONFIG_FILE) if CONFIG_FILE.exists() else Settings()
apply_logging_settings(settings)
