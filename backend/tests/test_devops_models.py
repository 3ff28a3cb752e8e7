"""Testes dos modelos do Azure DevOps."""
import pytest

from devops_bot.models.devops_models import Artifact, ReleaseApproval
from devops_bot.models.user_data import UserData


def test_artifact_build_definition_id():
    artifact = Artifact.model_validate(
        {"alias": "_Web CI", "type": "build", "definitionReference": {"definition": {"id": "42", "name": "Web CI"}}}
    )
    assert artifact.is_build
    assert artifact.build_definition_id == 42


def test_artifact_without_definition_reference():
    artifact = Artifact(alias="repo", type="Git")
    assert not artifact.is_build
    with pytest.raises(KeyError):
        artifact.build_definition_id


def test_approval_payload_keeps_unknown_fields():
    approval = ReleaseApproval.model_validate({"id": 3, "status": "pending", "rank": 1, "isAutomated": False})
    payload = approval.to_payload()
    assert payload["rank"] == 1
    assert payload["isAutomated"] is False
    assert payload["status"] == "pending"


def test_user_data_flags():
    assert not UserData().is_connected
    user = UserData.model_validate(
        {"account": "fabrikam", "team_project": "Web", "profile": {"id": "1", "token": {"access_token": "t"}}}
    )
    assert user.is_connected
    assert user.has_project
