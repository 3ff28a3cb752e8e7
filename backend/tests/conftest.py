"""Configuração pytest e fixtures."""
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from botbuilder.core import TurnContext
from botbuilder.schema import Activity, ActivityTypes, ChannelAccount, ConversationAccount

# Garante que backend está no path
_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: testes que exigem token real do Azure DevOps")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)


class FakeAccessor:
    """StatePropertyAccessor em memória (mesma semântica de get/set/delete)."""

    def __init__(self, value=None):
        self.value = value

    async def get(self, turn_context, default_value_or_factory=None):
        if self.value is None and default_value_or_factory is not None:
            self.value = default_value_or_factory() if callable(default_value_or_factory) else default_value_or_factory
        return self.value

    async def set(self, turn_context, value):
        self.value = value

    async def delete(self, turn_context):
        self.value = None


def make_activity(text=None, type_=ActivityTypes.message, **kwargs):
    return Activity(
        type=type_,
        text=text,
        channel_id="test",
        from_property=ChannelAccount(id="user-1", name="Ana"),
        recipient=ChannelAccount(id="bot-1", name="DevOpsBot"),
        conversation=ConversationAccount(id="conv-1"),
        **kwargs,
    )


@pytest.fixture
def turn_context():
    """TurnContext falso que registra as atividades enviadas."""
    context = MagicMock(spec=TurnContext)
    context.activity = make_activity("")
    context.send_activity = AsyncMock()
    return context


@pytest.fixture
def connected_user():
    """Dados de usuário já conectado a fabrikam/Web."""
    return {
        "account": "fabrikam",
        "team_project": "Web",
        "profile": {
            "id": "d6245f20-2af8-44f4-9451-8107cb2767db",
            "display_name": "Ana",
            "email_address": "ana@fabrikam.com",
            "token": {"access_token": "token-123"},
        },
    }


def sent_texts(context):
    """Textos enviados via send_activity (ignora cards)."""
    texts = []
    for call in context.send_activity.call_args_list:
        activity = call.args[0]
        texts.append(activity if isinstance(activity, str) else activity.text)
    return texts
