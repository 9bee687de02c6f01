"""Guarda de inicialização única (init-once) thread-safe."""

from __future__ import annotations

import threading
from typing import Callable


class InitOnce:
    """Executa uma função de inicialização exatamente uma vez com sucesso.

    - checagem rápida sem lock; depois checagem + execução sob lock
    - se a função levantar exceção, a guarda continua aberta e a próxima
      chamada tenta de novo (a exceção é propagada ao chamador)
    - após o sucesso, chamadas seguintes não tocam no lock
    """

    def __init__(self) -> None:
        self._done = False
        self._lock = threading.Lock()

    @property
    def done(self) -> bool:
        return self._done

    def run(self, func: Callable[[], object]) -> bool:
        """Retorna True se esta chamada executou `func`."""
        if self._done:
            return False
        with self._lock:
            if self._done:
                return False
            func()
            self._done = True
            return True
