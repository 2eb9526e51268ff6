"""
Erros do modelo de mensagens ESL.

Só a consulta de header ausente vira exceção. Content-Length inválido
e linhas malformadas degradam para valores padrão (ver message.py).
"""


class EslError(Exception):
    """Base para erros do pacote freeswitch_esl."""


class HeaderNotFoundError(EslError, KeyError):
    """
    Header consultado não existe na mensagem.

    Herda de KeyError para que código que já faz ``except KeyError``
    continue funcionando.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Header not found: {self.name!r}"
