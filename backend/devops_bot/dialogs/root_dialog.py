"""RootDialog: ponto de entrada de todas as conversas e roteamento de comandos."""
import logging
from typing import Awaitable, Optional

from botbuilder.core import MessageFactory, TurnContext
from botbuilder.schema import Activity, ActivityTypes

from devops_bot.dialogs import labels
from devops_bot.dialogs.base import CommandRegistry, Dialog, DialogResult, StateAccessor
from devops_bot.dialogs.cards import main_options_card
from devops_bot.services.telemetry import Telemetry
from devops_bot.utils.guards import require_not_blank, require_not_none

logger = logging.getLogger(__name__)


class RootDialog:
    """
    Recebe cada atividade da conversa:
    - conversationUpdate: dá boas-vindas a cada membro adicionado (exceto o próprio bot);
    - demais atividades: se há dialog aguardando, repassa a mensagem a ele; senão
      resolve o texto no registro de comandos e delega ao dialog encontrado.
      Texto sem comando registrado recebe o card de opções.

    O comando do dialog ativo fica em `dialog_state` (estado da conversa), assim a
    conversa continua no mesmo dialog entre turnos.

    As entradas públicas validam os argumentos antes de criar a coroutine: None
    falha na hora, sem resposta nem telemetria.
    """

    def __init__(
        self,
        eula_url: str,
        telemetry: Telemetry,
        registry: CommandRegistry,
        dialog_state: StateAccessor,
    ) -> None:
        self.eula_url = require_not_blank(eula_url, "eula_url")
        self.telemetry = require_not_none(telemetry, "telemetry")
        self.registry = require_not_none(registry, "registry")
        self.dialog_state = require_not_none(dialog_state, "dialog_state")

    def handle_activity(self, turn_context: TurnContext, activity: Activity) -> Awaitable[None]:
        require_not_none(turn_context, "turn_context")
        require_not_none(activity, "activity")
        return self._handle_activity(turn_context, activity)

    def handle_command(self, turn_context: TurnContext, activity: Activity) -> Awaitable[None]:
        require_not_none(turn_context, "turn_context")
        require_not_none(activity, "activity")
        return self._handle_command(turn_context, activity)

    def welcome(self, turn_context: TurnContext, activity: Activity) -> Awaitable[None]:
        require_not_none(turn_context, "turn_context")
        require_not_none(activity, "activity")
        return self._welcome(turn_context, activity)

    def resume_after_child(
        self, turn_context: TurnContext, dialog: Dialog, result: DialogResult
    ) -> Awaitable[None]:
        require_not_none(turn_context, "turn_context")
        require_not_none(dialog, "dialog")
        require_not_none(result, "result")
        return self._resume_after_child(turn_context, dialog, result)

    async def _handle_activity(self, turn_context: TurnContext, activity: Activity) -> None:
        if (activity.type or "").lower() == ActivityTypes.conversation_update.lower():
            await self._welcome(turn_context, activity)
            return

        active = await self.dialog_state.get(turn_context)
        if active:
            dialog = self.registry.find(active)
            if dialog is not None:
                result = await dialog.resume(turn_context, activity)
                await self._resume_after_child(turn_context, dialog, result)
                return
            logger.warning("Dialog ativo %r não está mais registrado; descartado", active)
            await self.dialog_state.delete(turn_context)

        await self._handle_command(turn_context, activity)

    async def _handle_command(
        self, turn_context: TurnContext, activity: Activity, exclude: Optional[Dialog] = None
    ) -> None:
        dialog = self.registry.find(activity.text)

        # exclude: dialog cujo begin acabou de devolver UNRECOGNIZED para este mesmo texto
        if dialog is None or dialog is exclude:
            reply = MessageFactory.attachment(main_options_card(self.registry.commands))
            await turn_context.send_activity(reply)
            return

        self._track(activity.text)
        result = await dialog.begin(turn_context, activity)
        await self._resume_after_child(turn_context, dialog, result, begun=True)

    async def _welcome(self, turn_context: TurnContext, activity: Activity) -> None:
        recipient_id = (activity.recipient.id if activity.recipient else "") or ""
        for member in activity.members_added or []:
            if (member.id or "").casefold() == recipient_id.casefold():
                continue
            await turn_context.send_activity(
                MessageFactory.text(labels.WELCOME_USER.format(name=member.name, eula=self.eula_url))
            )

    async def _resume_after_child(
        self, turn_context: TurnContext, dialog: Dialog, result: DialogResult, begun: bool = False
    ) -> None:
        if result is DialogResult.WAITING:
            await self.dialog_state.set(turn_context, dialog.command)
            return

        await self.dialog_state.delete(turn_context)
        if result is DialogResult.UNRECOGNIZED:
            logger.debug("Dialog %r não reconheceu a mensagem; resolvendo comando novamente", dialog.command)
            await self._handle_command(turn_context, turn_context.activity, exclude=dialog if begun else None)

    def _track(self, command: str) -> None:
        try:
            self.telemetry.track_event(command)
        except Exception as e:
            logger.warning("Telemetria indisponível: %s", e)
