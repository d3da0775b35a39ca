"""Application settings.

Uses pydantic-settings so every value can be overridden from the environment.
Prefix: GPKG_CSV_
"""
from __future__ import annotations

import logging
import tempfile
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='GPKG_CSV_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    output_dir: str = Field(
        default_factory=tempfile.gettempdir,
        description="Directory the converted CSV is written to for download",
    )
    max_upload_mb: float = Field(
        default=100,
        description="Advisory upload size; larger files still convert but get a notice",
    )
    preview_lines: int = Field(default=5, ge=1)
    log_level: str = Field(default='INFO')
    server_name: str = Field(default='127.0.0.1')
    server_port: int = Field(default=7860)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = 'INFO'):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
