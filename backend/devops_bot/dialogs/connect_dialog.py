"""Dialog 'connect': escolhe a conta e o team project usados pelos demais comandos."""
import logging

from botbuilder.core import TurnContext
from botbuilder.schema import Activity

from devops_bot.dialogs import labels
from devops_bot.dialogs.base import DevOpsDialog, DialogResult

logger = logging.getLogger(__name__)


class ConnectDialog(DevOpsDialog):
    """Lista as contas do perfil e grava 'conta/projeto' nos dados do usuário."""

    command = "connect"

    async def begin(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        user = await self.connected_user(turn_context, need_project=False)
        if user is None:
            return DialogResult.HANDLED

        accounts = await self.call(self.vsts.get_accounts, user.profile.token, user.profile.id)
        if not accounts:
            await self.reply(turn_context, labels.NO_ACCOUNTS)
            return DialogResult.HANDLED

        lines = [f"- {a.account_name}" for a in sorted(accounts, key=lambda a: a.account_name.lower())]
        await self.reply(turn_context, "\n".join(lines + ["", labels.CONNECT_PROMPT]))
        return DialogResult.WAITING

    async def resume(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        text = (activity.text or "").strip()
        if "/" not in text:
            return DialogResult.UNRECOGNIZED
        account, project = (part.strip() for part in text.split("/", 1))
        if not account or not project:
            return DialogResult.UNRECOGNIZED

        user = await self.connected_user(turn_context, need_project=False)
        if user is None:
            return DialogResult.HANDLED

        projects = await self.call(self.vsts.get_projects, account, user.profile.token)
        match = next((p for p in projects if p.name.casefold() == project.casefold()), None)
        if match is None:
            await self.reply(turn_context, labels.PROJECT_NOT_FOUND.format(project=project, account=account))
            return DialogResult.WAITING

        user.account = account
        user.team_project = match.name
        await self.save_user(turn_context, user)
        logger.info("Usuário %s conectado a %s/%s", user.profile.id, account, match.name)
        await self.reply(turn_context, labels.CONNECTED.format(account=account, project=match.name))
        return DialogResult.HANDLED
