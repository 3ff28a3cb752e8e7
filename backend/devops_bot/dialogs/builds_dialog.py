"""Dialog 'builds': lista definições de build e enfileira um build."""
from botbuilder.core import TurnContext
from botbuilder.schema import Activity

from devops_bot.dialogs import labels
from devops_bot.dialogs.base import DevOpsDialog, DialogResult, parse_verb


class BuildsDialog(DevOpsDialog):
    command = "builds"

    async def begin(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        user = await self.connected_user(turn_context)
        if user is None:
            return DialogResult.HANDLED

        definitions = await self.call(
            self.vsts.get_build_definitions, user.account, user.team_project, user.profile.token
        )
        if not definitions:
            await self.reply(turn_context, labels.NO_BUILD_DEFINITIONS.format(project=user.team_project))
            return DialogResult.HANDLED

        lines = [f"- **{d.id}** {d.name}" for d in definitions]
        await self.reply(turn_context, "\n".join(lines + ["", labels.QUEUE_PROMPT]))
        return DialogResult.WAITING

    async def resume(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        parsed = parse_verb(activity.text, "queue")
        if parsed is None:
            return DialogResult.UNRECOGNIZED
        definition_id, _ = parsed

        user = await self.connected_user(turn_context)
        if user is None:
            return DialogResult.HANDLED

        build = await self.call(
            self.vsts.queue_build, user.account, user.team_project, definition_id, user.profile.token
        )
        await self.reply(turn_context, labels.BUILD_QUEUED.format(number=build.build_number, id=build.id))
        return DialogResult.HANDLED
