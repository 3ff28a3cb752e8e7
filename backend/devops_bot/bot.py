"""Montagem do bot: serviços, registro de comandos, estado e adapter do Bot Framework."""
import logging
from dataclasses import dataclass

from botbuilder.core import (
    Bot,
    BotFrameworkAdapter,
    BotFrameworkAdapterSettings,
    ConversationState,
    MemoryStorage,
    Storage,
    TurnContext,
    UserState,
)
from botframework.connector.auth import MicrosoftAppCredentials

from devops_bot.config import Settings
from devops_bot.dialogs import labels
from devops_bot.dialogs.approvals_dialog import ApprovalsDialog
from devops_bot.dialogs.base import CommandRegistry, StateAccessor
from devops_bot.dialogs.builds_dialog import BuildsDialog
from devops_bot.dialogs.connect_dialog import ConnectDialog
from devops_bot.dialogs.releases_dialog import ReleasesDialog
from devops_bot.dialogs.root_dialog import RootDialog
from devops_bot.services.telemetry import Telemetry
from devops_bot.services.vsts_service import VstsService

logger = logging.getLogger(__name__)


class DevOpsBot(Bot):
    """Executa o RootDialog a cada turno e grava o estado da conversa e do usuário."""

    def __init__(self, root_dialog: RootDialog, conversation_state: ConversationState, user_state: UserState) -> None:
        self.root_dialog = root_dialog
        self.conversation_state = conversation_state
        self.user_state = user_state

    async def on_turn(self, context: TurnContext) -> None:
        await self.root_dialog.handle_activity(context, context.activity)
        await self.conversation_state.save_changes(context)
        await self.user_state.save_changes(context)


def build_registry(vsts_service: VstsService, user_data: StateAccessor) -> CommandRegistry:
    """Comandos disponíveis no bot."""
    return CommandRegistry([
        ConnectDialog(vsts_service, user_data),
        BuildsDialog(vsts_service, user_data),
        ReleasesDialog(vsts_service, user_data),
        ApprovalsDialog(vsts_service, user_data),
    ])


@dataclass
class BotApp:
    adapter: BotFrameworkAdapter
    bot: DevOpsBot
    telemetry: Telemetry


def create_adapter(config: Settings, conversation_state: ConversationState, telemetry: Telemetry) -> BotFrameworkAdapter:
    """Adapter autenticado com as credenciais do bot e tratamento de erro por turno."""
    adapter = BotFrameworkAdapter(
        BotFrameworkAdapterSettings(app_id=config.MICROSOFT_APP_ID, app_password=config.MICROSOFT_APP_PASSWORD)
    )
    # Depurando com o emulador: respostas vão para a URL em que ele escuta
    if config.emulator_url:
        MicrosoftAppCredentials.trust_service_url(config.emulator_url)
        logger.info("Emulador configurado: %s", config.emulator_url)

    async def on_turn_error(context: TurnContext, error: Exception) -> None:
        logger.error("Erro não tratado no turno: %s", error, exc_info=error)
        telemetry.track_exception(error)
        telemetry.track_event("TurnError", {"error": type(error).__name__})
        await context.send_activity(labels.TURN_ERROR)
        # Volta ao estado inicial: o dialog ativo é descartado
        await conversation_state.delete(context)

    adapter.on_turn_error = on_turn_error
    return adapter


def build_bot(config: Settings, storage: Storage | None = None, vsts_service: VstsService | None = None) -> BotApp:
    """Monta o grafo de objetos do bot explicitamente (uma vez, na subida do processo)."""
    storage = storage or MemoryStorage()
    conversation_state = ConversationState(storage)
    user_state = UserState(storage)
    telemetry = Telemetry.from_settings(config)

    registry = build_registry(vsts_service or VstsService(), user_state.create_property("UserData"))
    root_dialog = RootDialog(
        eula_url=config.EULA_URL,
        telemetry=telemetry,
        registry=registry,
        dialog_state=conversation_state.create_property("ActiveDialog"),
    )
    bot = DevOpsBot(root_dialog, conversation_state, user_state)
    adapter = create_adapter(config, conversation_state, telemetry)
    return BotApp(adapter=adapter, bot=bot, telemetry=telemetry)
