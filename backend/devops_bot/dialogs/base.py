"""Contrato dos dialogs de comando, registro de comandos e helpers comuns."""
import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Protocol

from botbuilder.core import MessageFactory, TurnContext
from botbuilder.schema import Activity

from devops_bot.dialogs import labels
from devops_bot.models.user_data import UserData
from devops_bot.services.vsts_service import VstsService


class DialogResult(Enum):
    """Resultado devolvido por um dialog ao RootDialog."""

    HANDLED = "handled"  # terminou; volta a aguardar eventos
    WAITING = "waiting"  # continua ativo e recebe a próxima mensagem
    UNRECOGNIZED = "unrecognized"  # não entendeu; o RootDialog resolve o comando de novo


class StateAccessor(Protocol):
    """Subconjunto de botbuilder.core.StatePropertyAccessor usado aqui."""

    async def get(self, turn_context: TurnContext, default_value_or_factory: Any = None) -> Any: ...

    async def set(self, turn_context: TurnContext, value: Any) -> None: ...

    async def delete(self, turn_context: TurnContext) -> None: ...


class Dialog(ABC):
    """Dialog acionado por um comando de texto."""

    command: str = ""

    @abstractmethod
    async def begin(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        """Primeira mensagem (o próprio comando)."""

    async def resume(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        """Mensagens seguintes enquanto o dialog estiver aguardando (WAITING)."""
        return DialogResult.UNRECOGNIZED


def _command_key(text: str) -> str:
    return text.strip().casefold()


class CommandRegistry:
    """Mapa explícito comando -> dialog, comparação sem diferenciar maiúsculas."""

    def __init__(self, dialogs: Iterable[Dialog] = ()) -> None:
        self._dialogs: dict[str, Dialog] = {}
        for dialog in dialogs:
            self.register(dialog)

    def register(self, dialog: Dialog) -> None:
        key = _command_key(dialog.command or "")
        if not key:
            raise ValueError(f"{type(dialog).__name__} sem comando")
        if key in self._dialogs:
            raise ValueError(f"Comando duplicado: {dialog.command}")
        self._dialogs[key] = dialog

    def find(self, text: Optional[str]) -> Optional[Dialog]:
        """Dialog registrado para o texto exato do comando (ou None)."""
        if not text:
            return None
        return self._dialogs.get(_command_key(text))

    @property
    def commands(self) -> list[str]:
        return [dialog.command for dialog in self._dialogs.values()]

    def __len__(self) -> int:
        return len(self._dialogs)


def parse_verb(text: Optional[str], verb: str) -> Optional[tuple[int, str]]:
    """
    Interpreta '<verbo> <id> [resto]'. Retorna (id, resto) ou None se o texto não
    seguir o formato. Ex.: parse_verb("approve 12 ok", "approve") -> (12, "ok").
    """
    parts = (text or "").strip().split(maxsplit=2)
    if len(parts) < 2 or parts[0].casefold() != verb.casefold():
        return None
    if not parts[1].isdigit() or int(parts[1]) <= 0:
        return None
    return int(parts[1]), parts[2].strip() if len(parts) > 2 else ""


class DevOpsDialog(Dialog):
    """Base dos dialogs que consultam o Azure DevOps em nome do usuário."""

    def __init__(self, vsts_service: VstsService, user_data: StateAccessor) -> None:
        self.vsts = vsts_service
        self.user_data = user_data

    async def load_user(self, turn_context: TurnContext) -> UserData:
        raw = await self.user_data.get(turn_context, dict)
        return UserData.model_validate(raw or {})

    async def save_user(self, turn_context: TurnContext, user: UserData) -> None:
        await self.user_data.set(turn_context, user.model_dump(mode="json"))

    async def connected_user(self, turn_context: TurnContext, *, need_project: bool = True) -> Optional[UserData]:
        """Usuário com perfil (e team project, se need_project). Responde e retorna None se faltar algo."""
        user = await self.load_user(turn_context)
        if not user.is_connected:
            await self.reply(turn_context, labels.NOT_CONNECTED)
            return None
        if need_project and not user.has_project:
            await self.reply(turn_context, labels.NO_PROJECT)
            return None
        return user

    async def call(self, func: Callable[..., Any], *args: Any) -> Any:
        """Chamada bloqueante (requests) fora do event loop."""
        return await asyncio.to_thread(func, *args)

    async def reply(self, turn_context: TurnContext, text: str) -> None:
        await turn_context.send_activity(MessageFactory.text(text))
