"""Parser de arquivos `.properties` (chave=valor, um nível).

Regras suportadas (compatíveis com o formato clássico de properties):
- linhas em branco e linhas iniciadas por `#` ou `!` são comentários
- separador é o primeiro `=`, `:` ou espaço não escapado
- barra invertida no fim da linha continua a linha lógica seguinte
- escapes `\\t \\n \\r \\f`, `\\uXXXX` e `\\c` -> `c` para qualquer outro caractere

Chave repetida no mesmo arquivo: a última ocorrência vence.
"""

from __future__ import annotations

import re
import string
from typing import Dict, Iterator, Tuple

_WHITESPACE = " \t\f"
_SEPARATORS = "=:" + _WHITESPACE
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class PropertiesSyntaxError(ValueError):
    """Conteúdo `.properties` malformado (ex.: escape `\\u` inválido)."""

    def __init__(self, message: str, *, source: str, line: int) -> None:
        super().__init__(f"{source}:{line}: {message}")
        self.reason = message
        self.source = source
        self.line = line


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    natural = _LINE_BREAK.split(text)
    i = 0
    while i < len(natural):
        line_no = i + 1
        line = natural[i].lstrip(_WHITESPACE)
        i += 1
        if not line or line[0] in "#!":
            continue

        parts = []
        while _continues(line):
            parts.append(line[:-1])
            if i >= len(natural):
                line = ""
                break
            line = natural[i].lstrip(_WHITESPACE)
            i += 1
        parts.append(line)
        yield line_no, "".join(parts)


def _split_entry(line: str) -> Tuple[str, str]:
    idx = 0
    escaped = False
    while idx < len(line):
        c = line[idx]
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c in _SEPARATORS:
            break
        idx += 1

    key, rest = line[:idx], line[idx:].lstrip(_WHITESPACE)
    if rest and rest[0] in "=:":
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(raw: str, *, source: str, line: int) -> str:
    out = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue

        i += 1
        if i >= len(raw):
            break
        c = raw[i]
        if c == "u":
            digits = raw[i + 1:i + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise PropertiesSyntaxError(
                    f"escape \\u malformado: \\u{digits}", source=source, line=line
                )
            out.append(chr(int(digits, 16)))
            i += 5
            continue

        out.append(_ESCAPES.get(c, c))
        i += 1
    return "".join(out)


def parse_properties(text: str, *, source: str = "<string>") -> Dict[str, str]:
    """Converte o texto de um arquivo `.properties` em um dict plano.

    Raises:
        PropertiesSyntaxError: se algum escape `\\uXXXX` for inválido.
    """
    entries: Dict[str, str] = {}
    for line_no, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        key = _unescape(raw_key, source=source, line=line_no)
        entries[key] = _unescape(raw_value, source=source, line=line_no)
    return entries
