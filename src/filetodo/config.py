"""Application configuration."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    todos_dir: str = "todos"
    storage_root: Optional[Path] = None
    create_storage_root: bool = False
    max_id: int = 1000
    read_chunk_size: int = 64
    log_level: str = "WARNING"

    class Config:
        env_prefix = "FILETODO_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
