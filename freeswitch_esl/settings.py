"""
Configuração via variáveis de ambiente.

Variáveis:
- ESL_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default INFO)
- ESL_LOG_JSON: "true"/"false" - formato JSON (default true)
- ESL_LOG_DIR: diretório para arquivo de log com rotation (opcional)
"""

import os
from typing import Optional

from pydantic import BaseModel, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class LoggingSettings(BaseModel):
    """Configuração de logging."""

    log_level: str = "INFO"
    json_format: bool = True
    log_dir: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {v}")
        return level

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        return cls(
            log_level=os.getenv("ESL_LOG_LEVEL", "INFO"),
            json_format=_env_bool("ESL_LOG_JSON", True),
            log_dir=os.getenv("ESL_LOG_DIR") or None,
        )
