"""Validações de argumentos (fail-fast) usadas nas entradas públicas."""
from typing import Any


class InvalidArgumentError(ValueError):
    """Argumento nulo, vazio ou fora do intervalo permitido."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{name}: {message}")
        self.name = name


def require_not_none(value: Any, name: str) -> Any:
    """Falha se value for None. Retorna o próprio valor."""
    if value is None:
        raise InvalidArgumentError(name, "não pode ser None")
    return value


def require_not_blank(value: str | None, name: str) -> str:
    """Falha se value for None, vazio ou só espaços."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError(name, "não pode ser vazio")
    return value


def require_positive(value: int, name: str) -> int:
    """Falha se value não for um inteiro maior que zero."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(name, f"deve ser maior que zero (recebido: {value!r})")
    return value
