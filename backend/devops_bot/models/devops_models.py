"""Modelos para integração Azure DevOps (contas, builds, releases, aprovações)."""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Tipo de artefato de release vinculado a uma definição de build
BUILD_ARTIFACT_TYPE = "Build"


class VstsModel(BaseModel):
    """Base: aliases camelCase da API e campos desconhecidos preservados."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """Corpo JSON para envio à API (camelCase, sem campos nulos)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OAuthToken(VstsModel):
    """Token OAuth emitido pelo Azure DevOps para o usuário."""

    access_token: str
    token_type: str = "jwt-bearer"
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None


class VstsProfile(VstsModel):
    """Perfil do usuário conectado, com o token usado nas chamadas."""

    id: str
    display_name: str = Field(default="", alias="displayName")
    email_address: str = Field(default="", alias="emailAddress")
    token: Optional[OAuthToken] = None


class Account(VstsModel):
    """Organização (conta) do Azure DevOps."""

    account_id: str = Field(alias="accountId")
    account_name: str = Field(alias="accountName")
    account_uri: str = Field(default="", alias="accountUri")


class TeamProjectReference(VstsModel):
    """Team project: escopo de definições de build/release."""

    id: str
    name: str
    description: Optional[str] = None
    state: Optional[str] = None


class BuildDefinitionReference(VstsModel):
    """Referência a uma definição de build."""

    id: int
    name: str = ""
    path: Optional[str] = None


class Build(VstsModel):
    """Execução de uma definição de build."""

    id: int
    build_number: str = Field(default="", alias="buildNumber")
    status: Optional[str] = None
    result: Optional[str] = None
    last_changed_date: Optional[datetime] = Field(default=None, alias="lastChangedDate")
    definition: Optional[BuildDefinitionReference] = None


class Artifact(VstsModel):
    """Artefato de uma definição de release."""

    alias: str
    type: str = ""
    definition_reference: dict[str, Any] = Field(default_factory=dict, alias="definitionReference")

    @property
    def is_build(self) -> bool:
        return self.type.lower() == BUILD_ARTIFACT_TYPE.lower()

    @property
    def build_definition_id(self) -> int:
        """ID da definição de build vinculada (definitionReference.definition.id)."""
        ref = self.definition_reference.get("definition") or {}
        return int(ref["id"])


class ReleaseDefinition(VstsModel):
    """Definição (template) de release."""

    id: int
    name: str = ""
    artifacts: list[Artifact] = Field(default_factory=list)


class Release(VstsModel):
    """Instância de release."""

    id: int
    name: str = ""
    status: Optional[str] = None


class ApprovalStatus(str, Enum):
    """Estados de uma aprovação de release."""

    UNDEFINED = "undefined"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REASSIGNED = "reassigned"
    CANCELED = "canceled"
    SKIPPED = "skipped"


class ReleaseApproval(VstsModel):
    """Aprovação (gate) de um ambiente de release."""

    id: int
    status: ApprovalStatus = ApprovalStatus.PENDING
    comments: Optional[str] = None
    approval_type: Optional[str] = Field(default=None, alias="approvalType")
    release: Optional[dict[str, Any]] = None
    release_environment: Optional[dict[str, Any]] = Field(default=None, alias="releaseEnvironment")

    @property
    def release_name(self) -> str:
        return (self.release or {}).get("name") or ""

    @property
    def environment_name(self) -> str:
        return (self.release_environment or {}).get("name") or ""


class ArtifactMetadata(VstsModel):
    """Par (alias, build) enviado ao iniciar uma release."""

    alias: str
    instance_reference: dict[str, str] = Field(alias="instanceReference")


class ReleaseStartMetadata(VstsModel):
    """Pedido de criação de release."""

    definition_id: int = Field(alias="definitionId")
    artifacts: list[ArtifactMetadata] = Field(default_factory=list)
