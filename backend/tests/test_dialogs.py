"""Testes dos dialogs de comando (connect, builds, releases, approvals)."""
from unittest.mock import MagicMock

import pytest

from conftest import FakeAccessor, make_activity, sent_texts
from devops_bot.dialogs.approvals_dialog import ApprovalsDialog
from devops_bot.dialogs.base import CommandRegistry, DialogResult, parse_verb
from devops_bot.dialogs.builds_dialog import BuildsDialog
from devops_bot.dialogs.connect_dialog import ConnectDialog
from devops_bot.dialogs.releases_dialog import ReleasesDialog
from devops_bot.models.devops_models import (
    Account,
    ApprovalStatus,
    Build,
    BuildDefinitionReference,
    Release,
    ReleaseApproval,
    ReleaseDefinition,
    TeamProjectReference,
)
from devops_bot.services.vsts_service import VstsService


@pytest.fixture
def vsts():
    return MagicMock(spec=VstsService)


# --- helpers ----------------------------------------------------------------

def test_parse_verb():
    assert parse_verb("approve 12 looks good", "approve") == (12, "looks good")
    assert parse_verb("QUEUE 3", "queue") == (3, "")
    assert parse_verb("queue", "queue") is None
    assert parse_verb("queue abc", "queue") is None
    assert parse_verb("queue 0", "queue") is None
    assert parse_verb(None, "queue") is None


def test_registry_is_case_insensitive(vsts):
    builds = BuildsDialog(vsts, FakeAccessor())
    registry = CommandRegistry([builds])
    assert registry.find("BUILDS") is builds
    assert registry.find(" builds ") is builds
    assert registry.find("build") is None
    assert registry.find(None) is None


def test_registry_rejects_duplicates(vsts):
    with pytest.raises(ValueError):
        CommandRegistry([BuildsDialog(vsts, FakeAccessor()), BuildsDialog(vsts, FakeAccessor())])


# --- usuário sem conexão ------------------------------------------------------

@pytest.mark.asyncio
async def test_not_connected_user_gets_hint(vsts, turn_context):
    dialog = BuildsDialog(vsts, FakeAccessor())

    result = await dialog.begin(turn_context, make_activity("builds"))

    assert result is DialogResult.HANDLED
    assert "conectado" in sent_texts(turn_context)[0]
    vsts.get_build_definitions.assert_not_called()


@pytest.mark.asyncio
async def test_missing_project_gets_hint(vsts, turn_context, connected_user):
    connected_user["team_project"] = None
    dialog = ReleasesDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.begin(turn_context, make_activity("releases"))

    assert result is DialogResult.HANDLED
    assert "connect" in sent_texts(turn_context)[0]


# --- connect ------------------------------------------------------------------

@pytest.mark.asyncio
async def test_connect_lists_accounts_and_waits(vsts, turn_context, connected_user):
    vsts.get_accounts.return_value = [
        Account(account_id="2", account_name="tailspin"),
        Account(account_id="1", account_name="fabrikam"),
    ]
    dialog = ConnectDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.begin(turn_context, make_activity("connect"))

    assert result is DialogResult.WAITING
    text = sent_texts(turn_context)[0]
    assert text.index("fabrikam") < text.index("tailspin")
    token, member_id = vsts.get_accounts.call_args.args
    assert token.access_token == "token-123"
    assert member_id == connected_user["profile"]["id"]


@pytest.mark.asyncio
async def test_connect_stores_account_and_project(vsts, turn_context, connected_user):
    connected_user["account"] = None
    connected_user["team_project"] = None
    user_data = FakeAccessor(connected_user)
    vsts.get_projects.return_value = [TeamProjectReference(id="p1", name="Web Shop")]
    dialog = ConnectDialog(vsts, user_data)

    result = await dialog.resume(turn_context, make_activity("tailspin / web shop"))

    assert result is DialogResult.HANDLED
    assert user_data.value["account"] == "tailspin"
    assert user_data.value["team_project"] == "Web Shop"
    assert user_data.value["profile"]["token"]["access_token"] == "token-123"


@pytest.mark.asyncio
async def test_connect_unknown_project_keeps_waiting(vsts, turn_context, connected_user):
    vsts.get_projects.return_value = []
    dialog = ConnectDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.resume(turn_context, make_activity("fabrikam/Nope"))

    assert result is DialogResult.WAITING
    assert "Nope" in sent_texts(turn_context)[0]


@pytest.mark.asyncio
async def test_connect_other_text_is_unrecognized(vsts, turn_context, connected_user):
    dialog = ConnectDialog(vsts, FakeAccessor(connected_user))

    assert await dialog.resume(turn_context, make_activity("builds")) is DialogResult.UNRECOGNIZED
    turn_context.send_activity.assert_not_called()


# --- builds -------------------------------------------------------------------

@pytest.mark.asyncio
async def test_builds_lists_definitions(vsts, turn_context, connected_user):
    vsts.get_build_definitions.return_value = [BuildDefinitionReference(id=3, name="Web CI")]
    dialog = BuildsDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.begin(turn_context, make_activity("builds"))

    assert result is DialogResult.WAITING
    assert "Web CI" in sent_texts(turn_context)[0]
    assert vsts.get_build_definitions.call_args.args[:2] == ("fabrikam", "Web")


@pytest.mark.asyncio
async def test_builds_without_definitions(vsts, turn_context, connected_user):
    vsts.get_build_definitions.return_value = []
    dialog = BuildsDialog(vsts, FakeAccessor(connected_user))

    assert await dialog.begin(turn_context, make_activity("builds")) is DialogResult.HANDLED


@pytest.mark.asyncio
async def test_builds_queue(vsts, turn_context, connected_user):
    vsts.queue_build.return_value = Build(id=55, build_number="20240101.1")
    dialog = BuildsDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.resume(turn_context, make_activity("queue 3"))

    assert result is DialogResult.HANDLED
    assert vsts.queue_build.call_args.args[:3] == ("fabrikam", "Web", 3)
    assert "20240101.1" in sent_texts(turn_context)[0]


@pytest.mark.asyncio
async def test_builds_other_text_is_unrecognized(vsts, turn_context, connected_user):
    dialog = BuildsDialog(vsts, FakeAccessor(connected_user))

    assert await dialog.resume(turn_context, make_activity("approvals")) is DialogResult.UNRECOGNIZED
    vsts.queue_build.assert_not_called()


# --- releases -----------------------------------------------------------------

@pytest.mark.asyncio
async def test_releases_create(vsts, turn_context, connected_user):
    vsts.get_release_definitions.return_value = [ReleaseDefinition(id=7, name="Web CD")]
    vsts.create_release.return_value = Release(id=101, name="Release-101")
    dialog = ReleasesDialog(vsts, FakeAccessor(connected_user))

    assert await dialog.begin(turn_context, make_activity("releases")) is DialogResult.WAITING
    assert await dialog.resume(turn_context, make_activity("create 7")) is DialogResult.HANDLED

    assert vsts.create_release.call_args.args[:3] == ("fabrikam", "Web", 7)
    assert "Release-101" in sent_texts(turn_context)[-1]


# --- approvals ----------------------------------------------------------------

@pytest.mark.asyncio
async def test_approvals_lists_pending(vsts, turn_context, connected_user):
    vsts.get_approvals.return_value = [
        ReleaseApproval(id=12, release={"name": "Release-9"}, releaseEnvironment={"name": "Prod"}),
    ]
    dialog = ApprovalsDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.begin(turn_context, make_activity("approvals"))

    assert result is DialogResult.WAITING
    text = sent_texts(turn_context)[0]
    assert "Release-9" in text and "Prod" in text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text,status,comments",
    [
        ("approve 12 looks good", ApprovalStatus.APPROVED, "looks good"),
        ("Reject 12", ApprovalStatus.REJECTED, ""),
    ],
)
async def test_approvals_decision(vsts, turn_context, connected_user, text, status, comments):
    dialog = ApprovalsDialog(vsts, FakeAccessor(connected_user))

    result = await dialog.resume(turn_context, make_activity(text))

    assert result is DialogResult.HANDLED
    account, project, profile, approval_id, new_status, new_comments = vsts.change_approval_status.call_args.args
    assert (account, project, approval_id) == ("fabrikam", "Web", 12)
    assert profile.id == connected_user["profile"]["id"]
    assert new_status is status
    assert new_comments == comments


@pytest.mark.asyncio
async def test_approvals_other_text_is_unrecognized(vsts, turn_context, connected_user):
    dialog = ApprovalsDialog(vsts, FakeAccessor(connected_user))

    assert await dialog.resume(turn_context, make_activity("approve")) is DialogResult.UNRECOGNIZED
