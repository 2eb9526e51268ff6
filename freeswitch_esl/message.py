"""
EslMessage - Mensagem ESL decodificada.

A camada de transporte lê o socket, separa o bloco de headers e as
linhas do body (usando Content-Length) e entrega tudo para cá.
Este módulo só interpreta o que já foi lido:

- Headers: consulta por nome, Content-Length e Content-Type
- Body: visão chave/valor das linhas (parse_body)
- Frame aninhado: Content-Length dentro do body (BACKGROUND_JOB)

A mensagem é imutável depois de construída. Para montar uma mensagem
incrementalmente use EslMessageBuilder.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import unquote

from .errors import HeaderNotFoundError
from .headers import CONTENT_KEY, EslHeaders, parse_length, split_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EslMessage:
    """
    Mensagem ESL: headers + linhas do body.

    A identidade da mensagem é o conjunto de headers mais a sequência de
    linhas do body. O body parseado é recalculado a cada chamada.

    Attributes:
        headers: Nome do header -> valor (somente leitura)
        body_lines: Linhas do body, na ordem recebida
    """

    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    body_lines: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "body_lines", tuple(self.body_lines))

    def __reduce__(self):
        # MappingProxyType não é serializável; pickle/copy usam o dict
        return (self.__class__, (dict(self.headers), self.body_lines))

    @classmethod
    def from_lines(
        cls,
        header_lines: Iterable[str],
        body_lines: Iterable[str] = (),
    ) -> "EslMessage":
        """Cria mensagem a partir das linhas de header e de body."""
        builder = EslMessageBuilder()
        builder.add_header_lines(header_lines)
        builder.add_body_lines(body_lines)
        return builder.build()

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def header_value(self, name: str) -> str:
        """
        Retorna o valor do header exatamente como armazenado.

        Chame has_header() antes: header ausente é erro de uso.

        Raises:
            HeaderNotFoundError: se o header não existe
        """
        try:
            return self.headers[name]
        except KeyError:
            raise HeaderNotFoundError(name) from None

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Consulta sem exceção: retorna default se o header não existe."""
        return self.headers.get(name, default)

    def has_content_length(self) -> bool:
        return EslHeaders.CONTENT_LENGTH in self.headers

    def content_length(self) -> int:
        """Tamanho do body declarado, ou 0 se ausente/inválido."""
        return parse_length(self.headers.get(EslHeaders.CONTENT_LENGTH))

    def content_type(self) -> str:
        return self.headers.get(EslHeaders.CONTENT_TYPE, "")

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def parse_body(self) -> Dict[str, str]:
        """
        Visão chave/valor das linhas do body.

        - "Nome: Valor" -> result["Nome"] = "Valor"
        - linha sem delimitador -> result["__CONTENT__"] = linha
        - linha vazia/ininterpretável -> ignorada

        Chaves repetidas: a última linha vence. Com várias linhas sem
        delimitador só a última fica em __CONTENT__; use body_contents()
        para obter todas.
        """
        result: Dict[str, str] = {}
        for line in self.body_lines:
            parts = split_header(line)
            if parts is None:
                continue
            if len(parts) == 2:
                result[parts[0]] = parts[1]
            else:
                result[CONTENT_KEY] = line
        return result

    def body_contents(self) -> List[str]:
        """Todas as linhas do body sem delimitador, em ordem."""
        contents = []
        for line in self.body_lines:
            parts = split_header(line)
            if parts is not None and len(parts) == 1:
                contents.append(line)
        return contents

    # ------------------------------------------------------------------
    # Frame aninhado (ex: BACKGROUND_JOB)
    # ------------------------------------------------------------------

    def _nested_frame_parts(self) -> Optional[Tuple[str, ...]]:
        """Primeira linha do body cuja chave é Content-Length."""
        for line in self.body_lines:
            parts = split_header(line)
            if parts and parts[0] == EslHeaders.CONTENT_LENGTH:
                return parts
        return None

    def has_nested_frame(self) -> bool:
        return self._nested_frame_parts() is not None

    def nested_frame_length(self) -> int:
        """
        Tamanho do payload aninhado que o transporte ainda deve ler.

        Usa a primeira linha Content-Length do body; 0 se não existir
        ou se o valor for inválido.
        """
        parts = self._nested_frame_parts()
        if parts is None or len(parts) < 2:
            return 0
        return parse_length(parts[1])

    # Nomes usados pelo código de referência
    has_third_part = has_nested_frame
    third_part_content_length = nested_frame_length

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Dump legível: headers, linha em branco, body parseado, linha em branco."""
        lines = [f"{name}:{value}\n" for name, value in self.headers.items()]
        lines.append("\n")
        lines.extend(f"{key}:{value}\n" for key, value in self.parse_body().items())
        lines.append("\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        content_type = self.content_type() or "none"
        return (
            f"EslMessage({content_type}, headers={len(self.headers)}, "
            f"body_lines={len(self.body_lines)})"
        )


class EslMessageBuilder:
    """
    Monta uma EslMessage incrementalmente.

    Uso (camada de transporte):
        builder = EslMessageBuilder()
        for line in header_lines:
            builder.add_header_line(line)
        builder.add_body_lines(body_lines)
        message = builder.build()
    """

    def __init__(self, decode_values: bool = False):
        """
        Args:
            decode_values: Decodifica URL-encoding (%XX) dos headers lidos
                por add_header_line, como em eventos text/event-plain
        """
        self.decode_values = decode_values
        self._headers: Dict[str, str] = {}
        self._body_lines: List[str] = []

    def add_header(self, name: str, value: str) -> "EslMessageBuilder":
        self._headers[name] = value
        return self

    def add_header_line(self, line: str) -> "EslMessageBuilder":
        """Adiciona uma linha "Nome: Valor". Linhas ininterpretáveis são ignoradas."""
        parts = split_header(line)
        if parts is None:
            if line and logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Skipping unparsable header line: {line!r}")
            return self

        name = parts[0]
        value = parts[1] if len(parts) == 2 else ""
        if self.decode_values:
            name = unquote(name)
            value = unquote(value)

        return self.add_header(name, value)

    def add_header_lines(self, lines: Iterable[str]) -> "EslMessageBuilder":
        for line in lines:
            self.add_header_line(line)
        return self

    def add_body_line(self, line: str) -> "EslMessageBuilder":
        self._body_lines.append(line)
        return self

    def add_body_lines(self, lines: Iterable[str]) -> "EslMessageBuilder":
        self._body_lines.extend(lines)
        return self

    def build(self) -> EslMessage:
        return EslMessage(headers=self._headers, body_lines=self._body_lines)
