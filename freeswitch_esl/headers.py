"""
Headers ESL - nomes conhecidos e parser de linhas "Nome: Valor".

O mesmo parser serve para o bloco de headers e para as linhas do body
(eventos text/event-plain e BACKGROUND_JOB usam a mesma sintaxe).

Referências:
- https://developer.signalwire.com/freeswitch/FreeSWITCH-Explained/Client-and-Developer-Interfaces/Event-Socket-Library/
"""

import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class EslHeaders:
    """Nomes de headers com significado especial."""
    CONTENT_LENGTH = "Content-Length"
    CONTENT_TYPE = "Content-Type"
    EVENT_NAME = "Event-Name"
    JOB_UUID = "Job-UUID"


# Chave sintética para linhas do body sem delimitador
CONTENT_KEY = "__CONTENT__"


def split_header(line: str) -> Optional[Tuple[str, ...]]:
    """
    Divide uma linha no primeiro ":".

    Returns:
        (nome, valor) quando há delimitador e valor,
        (linha,) quando não há delimitador (ou o valor é vazio),
        None quando a linha não pode ser interpretada (vazia, sem nome).
    """
    if not line or not line.strip():
        return None

    name, sep, value = line.partition(":")
    if not sep:
        return (line.strip(),)

    name = name.strip()
    if not name:
        return None

    value = value.strip()
    if not value:
        return (name,)

    return (name, value)


def parse_length(value: Optional[str]) -> int:
    """
    Converte um Content-Length em inteiro.

    Nunca lança exceção: ausente, negativo ou não numérico vira 0.
    Só dígitos ASCII contam (o tamanho vem do wire).
    """
    if value is None:
        return 0

    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Invalid length {value!r}, using 0")
        return 0

    return int(text)
