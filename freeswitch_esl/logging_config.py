"""
Structured Logging Configuration.

Features:
- Logging estruturado com structlog
- Formato JSON (produção) ou console (desenvolvimento)
- Log rotation opcional
- Observador opcional de mensagens ESL (log_message)

O modelo de mensagens não depende desta configuração: os módulos só
usam logging.getLogger(__name__) e quem embute a biblioteca decide
se e como configurar.
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from .headers import EslHeaders
from .settings import LoggingSettings

SERVICE_NAME = "freeswitch-esl"
LOG_FILE_NAME = "freeswitch-esl.log"

_JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
_CONSOLE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Handlers instalados por configure_logging (removidos numa reconfiguração)
_installed_handlers: list = []


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Adiciona timestamp ISO."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def add_service_info(
    logger: logging.Logger,
    method_name: str,
    event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Adiciona informações do serviço."""
    event_dict["service"] = SERVICE_NAME
    return event_dict


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configura logging estruturado.

    Args:
        settings: Configuração (None = LoggingSettings.from_env())
    """
    settings = settings or LoggingSettings.from_env()
    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        add_timestamp,
        add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.json_format:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Logging padrão (módulos do pacote usam logging.getLogger)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    text_format = _JSON_FORMAT if settings.json_format else _CONSOLE_FORMAT

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(text_format))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if settings.log_dir:
        log_path = Path(settings.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path / LOG_FILE_NAME,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_JSON_FORMAT))
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Obtém logger com contexto.

    Uso:
        logger = get_logger(__name__)
        logger.info("message", key="value")
    """
    return structlog.get_logger(name)


def log_message(message, logger=None, event: str = "ESL message") -> None:
    """
    Registra um resumo de uma EslMessage em DEBUG.

    Não altera a mensagem; pode ser chamado pela camada de transporte
    depois de montar cada mensagem.

    Args:
        message: EslMessage
        logger: Logger structlog (None = get_logger(__name__))
        event: Texto do evento de log
    """
    logger = logger or get_logger(__name__)

    # Em text/event-plain os headers do evento vêm no body
    body = message.parse_body()
    event_name = message.get_header(EslHeaders.EVENT_NAME, body.get(EslHeaders.EVENT_NAME))
    job_uuid = message.get_header(EslHeaders.JOB_UUID, body.get(EslHeaders.JOB_UUID))

    logger.debug(
        event,
        content_type=message.content_type() or None,
        content_length=message.content_length(),
        event_name=event_name,
        job_uuid=job_uuid,
        headers=len(message.headers),
        body_lines=len(message.body_lines),
        nested_frame_length=message.nested_frame_length(),
    )
