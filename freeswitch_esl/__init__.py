# FreeSWITCH ESL message model
# Decodificação de uma mensagem ESL (headers + body) já delimitada
# pela camada de transporte.
#
# Uso:
#   from freeswitch_esl import EslMessage, EslMessageBuilder

__all__ = [
    "EslMessage",
    "EslMessageBuilder",
    "EslHeaders",
    "CONTENT_KEY",
    "EslError",
    "HeaderNotFoundError",
]


def __getattr__(name: str):
    """
    Lazy import dos símbolos públicos.
    """
    if name in ("EslMessage", "EslMessageBuilder"):
        from . import message
        return getattr(message, name)
    elif name in ("EslHeaders", "CONTENT_KEY"):
        from . import headers
        return getattr(headers, name)
    elif name in ("EslError", "HeaderNotFoundError"):
        from . import errors
        return getattr(errors, name)
    raise AttributeError(f"module 'freeswitch_esl' has no attribute {name!r}")
