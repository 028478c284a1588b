"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_flag, env_int, optional_env_var
from .errors import MissingConfigurationError

APP_DIR_NAME: Final[str] = "tangofinder"
DEFAULT_DB_FILENAME: Final[str] = "tango_videos.db"
DEFAULT_BUSY_TIMEOUT_MS: Final[int] = 5000


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self) -> Path:
        return self.resolve_data_dir() / self.database_filename

    def database_uri(self) -> str:
        return sqlite_uri(self.database_path())


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection settings for the read-only catalog snapshot."""

    uri: str
    busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS
    read_only: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.uri.startswith("sqlite")

    @property
    def sqlite_path(self) -> Path | None:
        """Filesystem path of a file-backed SQLite database, if any."""

        if not self.is_sqlite:
            return None
        _, _, remainder = self.uri.partition(":///")
        path = remainder.split("?", 1)[0]
        if not path or path == ":memory:":
            return None
        return Path(path)


def sqlite_uri(path: Path | str) -> str:
    return f"sqlite+pysqlite:///{path}"


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("TANGOFINDER_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Resolve ``DATABASE_URI``, then ``DATABASE_PATH``, then the default data dir."""

    busy_timeout_ms = env_int("TANGOFINDER_BUSY_TIMEOUT_MS", DEFAULT_BUSY_TIMEOUT_MS, minimum=0)
    read_only = env_flag("TANGOFINDER_READ_ONLY")

    env_uri = optional_env_var("DATABASE_URI")
    if env_uri:
        uri = env_uri
    elif (env_path := optional_env_var("DATABASE_PATH")) is not None:
        uri = sqlite_uri(Path(env_path).expanduser())
    else:
        storage_config = storage or get_storage_config()
        uri = storage_config.database_uri()
    config = DatabaseConfig(uri=uri, busy_timeout_ms=busy_timeout_ms, read_only=read_only)
    path = config.sqlite_path
    if read_only and path is not None and not path.exists():
        raise MissingConfigurationError(f"Read-only database not found: {path}")
    return config
