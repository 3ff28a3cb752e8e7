"""Fachada de acesso ao Azure DevOps: um método por operação remota."""
import logging
from datetime import datetime, timezone

from devops_bot.models.devops_models import (
    Account,
    ApprovalStatus,
    ArtifactMetadata,
    Build,
    BuildDefinitionReference,
    OAuthToken,
    Release,
    ReleaseApproval,
    ReleaseDefinition,
    ReleaseStartMetadata,
    TeamProjectReference,
    VstsProfile,
)
from devops_bot.services.vsts_connection import (
    VSTS_APP_URL,
    ConnectionFactory,
    VstsConnection,
    account_url,
    release_url,
)
from devops_bot.utils.guards import require_not_blank, require_not_none, require_positive

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _latest_build(builds: list[Build]) -> Build | None:
    """Build com o maior lastChangedDate (None se a lista estiver vazia)."""
    if not builds:
        return None
    return max(builds, key=lambda b: b.last_changed_date or _OLDEST)


class VstsService:
    """
    Acesso ao Azure DevOps sem estado: cada método valida os argumentos,
    abre uma conexão para o endpoint certo com o token recebido, faz o mínimo
    de chamadas e fecha a conexão. Sem retry e sem tradução de erros:
    falhas remotas (requests.RequestException) chegam ao chamador como vieram.
    """

    def __init__(self, connection_factory: ConnectionFactory | None = None) -> None:
        self._connect = connection_factory or VstsConnection

    def change_approval_status(
        self,
        account: str,
        team_project: str,
        profile: VstsProfile,
        approval_id: int,
        status: ApprovalStatus,
        comments: str | None,
    ) -> ReleaseApproval:
        """Lê a aprovação, troca status e comentário e grava o registro inteiro (last write wins)."""
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_not_none(profile, "profile")
        require_not_none(profile.token, "profile.token")
        require_positive(approval_id, "approval_id")

        with self._connect(release_url(account), profile.token) as client:
            data = client.get(f"release/approvals/{approval_id}", project=team_project)
            approval = ReleaseApproval.model_validate(data)
            approval.status = ApprovalStatus(status)
            approval.comments = comments
            payload = approval.to_payload()
            # comentário nulo também é gravado: limpa o comentário remoto
            payload["comments"] = approval.comments
            updated = client.patch(f"release/approvals/{approval_id}", payload, project=team_project)
        logger.info("Aprovação %s em %s/%s alterada para %s", approval_id, account, team_project, approval.status.value)
        return ReleaseApproval.model_validate(updated) if updated else approval

    def create_release(self, account: str, team_project: str, definition_id: int, token: OAuthToken) -> Release:
        """
        Cria uma release a partir da definição:
        - busca a definição;
        - para cada artefato do tipo Build, usa o build mais recente (lastChangedDate)
          da definição de build vinculada; artefato sem build é ignorado;
        - envia o pedido de início com um ArtifactMetadata por artefato resolvido.
        """
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_positive(definition_id, "definition_id")
        require_not_none(token, "token")

        with self._connect(release_url(account), token) as client:
            definition = ReleaseDefinition.model_validate(
                client.get(f"release/definitions/{definition_id}", project=team_project)
            )

        metadatas: list[ArtifactMetadata] = []
        with self._connect(account_url(account), token) as client:
            for artifact in (a for a in definition.artifacts if a.is_build):
                builds = [
                    Build.model_validate(b)
                    for b in client.get_list(
                        "build/builds",
                        project=team_project,
                        params={"definitions": str(artifact.build_definition_id)},
                    )
                ]
                build = _latest_build(builds)
                if build is None:
                    logger.info("Artefato %s sem builds; ignorado na release %s", artifact.alias, definition_id)
                    continue
                metadatas.append(ArtifactMetadata(alias=artifact.alias, instance_reference={"id": str(build.id)}))

        start = ReleaseStartMetadata(definition_id=definition_id, artifacts=metadatas)
        with self._connect(release_url(account), token) as client:
            data = client.post("release/releases", start.to_payload(), project=team_project)
        release = Release.model_validate(data)
        logger.info("Release %s criada (definição %s, %d artefatos)", release.id, definition_id, len(metadatas))
        return release

    def get_accounts(self, token: OAuthToken, member_id: str) -> list[Account]:
        """Contas das quais o membro (id do perfil) participa."""
        require_not_none(token, "token")
        require_not_blank(member_id, "member_id")

        with self._connect(VSTS_APP_URL, token) as client:
            items = client.get_list("accounts", params={"memberId": member_id})
        return [Account.model_validate(item) for item in items]

    def get_approval(self, account: str, team_project: str, approval_id: int, token: OAuthToken) -> ReleaseApproval:
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_positive(approval_id, "approval_id")
        require_not_none(token, "token")

        with self._connect(release_url(account), token) as client:
            data = client.get(f"release/approvals/{approval_id}", project=team_project)
        return ReleaseApproval.model_validate(data)

    def get_approvals(self, account: str, team_project: str, profile: VstsProfile) -> list[ReleaseApproval]:
        """Aprovações atribuídas ao perfil."""
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_not_none(profile, "profile")
        require_not_none(profile.token, "profile.token")

        with self._connect(release_url(account), profile.token) as client:
            items = client.get_list(
                "release/approvals", project=team_project, params={"assignedToFilter": profile.id}
            )
        return [ReleaseApproval.model_validate(item) for item in items]

    def get_build(self, account: str, team_project: str, build_id: int, token: OAuthToken) -> Build:
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_positive(build_id, "build_id")
        require_not_none(token, "token")

        with self._connect(account_url(account), token) as client:
            data = client.get(f"build/builds/{build_id}", project=team_project)
        return Build.model_validate(data)

    def get_build_definitions(
        self, account: str, team_project: str, token: OAuthToken
    ) -> list[BuildDefinitionReference]:
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_not_none(token, "token")

        with self._connect(account_url(account), token) as client:
            items = client.get_list("build/definitions", project=team_project)
        return [BuildDefinitionReference.model_validate(item) for item in items]

    def get_profile(self, token: OAuthToken) -> VstsProfile:
        """Perfil do dono do token (endpoint global, sem conta)."""
        require_not_none(token, "token")

        with self._connect(VSTS_APP_URL, token) as client:
            data = client.get("profile/profiles/me")
        profile = VstsProfile.model_validate(data)
        profile.token = token
        return profile

    def get_projects(self, account: str, token: OAuthToken) -> list[TeamProjectReference]:
        require_not_blank(account, "account")
        require_not_none(token, "token")

        with self._connect(account_url(account), token) as client:
            items = client.get_list("projects")
        return [TeamProjectReference.model_validate(item) for item in items]

    def get_release_definitions(self, account: str, team_project: str, token: OAuthToken) -> list[ReleaseDefinition]:
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_not_none(token, "token")

        with self._connect(release_url(account), token) as client:
            items = client.get_list("release/definitions", project=team_project)
        return [ReleaseDefinition.model_validate(item) for item in items]

    def queue_build(self, account: str, team_project: str, definition_id: int, token: OAuthToken) -> Build:
        """Enfileira um build da definição informada."""
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_positive(definition_id, "definition_id")
        require_not_none(token, "token")

        with self._connect(account_url(account), token) as client:
            data = client.post("build/builds", {"definition": {"id": definition_id}}, project=team_project)
        build = Build.model_validate(data)
        logger.info("Build %s enfileirado (definição %s em %s/%s)", build.id, definition_id, account, team_project)
        return build

    def get_release(self, account: str, team_project: str, release_id: int, token: OAuthToken) -> Release:
        require_not_blank(account, "account")
        require_not_blank(team_project, "team_project")
        require_positive(release_id, "release_id")
        require_not_none(token, "token")

        with self._connect(release_url(account), token) as client:
            data = client.get(f"release/releases/{release_id}", project=team_project)
        return Release.model_validate(data)
