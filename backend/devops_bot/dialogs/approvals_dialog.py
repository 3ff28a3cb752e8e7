"""Dialog 'approvals': lista aprovações do usuário e aprova/rejeita."""
from botbuilder.core import TurnContext
from botbuilder.schema import Activity

from devops_bot.dialogs import labels
from devops_bot.dialogs.base import DevOpsDialog, DialogResult, parse_verb
from devops_bot.models.devops_models import ApprovalStatus

# Verbo digitado -> novo status da aprovação
DECISIONS = {
    "approve": ApprovalStatus.APPROVED,
    "reject": ApprovalStatus.REJECTED,
}


class ApprovalsDialog(DevOpsDialog):
    command = "approvals"

    async def begin(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        user = await self.connected_user(turn_context)
        if user is None:
            return DialogResult.HANDLED

        approvals = await self.call(self.vsts.get_approvals, user.account, user.team_project, user.profile)
        if not approvals:
            await self.reply(turn_context, labels.NO_APPROVALS.format(project=user.team_project))
            return DialogResult.HANDLED

        lines = [f"- **{a.id}** {a.release_name} ({a.environment_name})" for a in approvals]
        await self.reply(turn_context, "\n".join(lines + ["", labels.APPROVAL_PROMPT]))
        return DialogResult.WAITING

    async def resume(self, turn_context: TurnContext, activity: Activity) -> DialogResult:
        for verb, status in DECISIONS.items():
            parsed = parse_verb(activity.text, verb)
            if parsed is not None:
                break
        else:
            return DialogResult.UNRECOGNIZED
        approval_id, comments = parsed

        user = await self.connected_user(turn_context)
        if user is None:
            return DialogResult.HANDLED

        await self.call(
            self.vsts.change_approval_status,
            user.account,
            user.team_project,
            user.profile,
            approval_id,
            status,
            comments,
        )
        await self.reply(turn_context, labels.APPROVAL_CHANGED.format(id=approval_id, status=status.value))
        return DialogResult.HANDLED
