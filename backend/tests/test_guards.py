"""Testes das validações de argumentos."""
import pytest

from devops_bot.utils.guards import (
    InvalidArgumentError,
    require_not_blank,
    require_not_none,
    require_positive,
)


def test_invalid_argument_is_value_error():
    assert issubclass(InvalidArgumentError, ValueError)


def test_require_not_none():
    assert require_not_none(0, "x") == 0
    with pytest.raises(InvalidArgumentError) as exc:
        require_not_none(None, "token")
    assert exc.value.name == "token"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_require_not_blank_rejects(value):
    with pytest.raises(InvalidArgumentError):
        require_not_blank(value, "account")


def test_require_not_blank_returns_value():
    assert require_not_blank("fabrikam", "account") == "fabrikam"


@pytest.mark.parametrize("value", [0, -5, True, "3", None])
def test_require_positive_rejects(value):
    with pytest.raises(InvalidArgumentError):
        require_positive(value, "definition_id")


def test_require_positive_returns_value():
    assert require_positive(3, "definition_id") == 3
