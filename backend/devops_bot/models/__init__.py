"""Modelos de domínio e DTOs."""
from devops_bot.models.devops_models import (
    Account,
    ApprovalStatus,
    Artifact,
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
from devops_bot.models.user_data import UserData

__all__ = [
    "Account",
    "ApprovalStatus",
    "Artifact",
    "ArtifactMetadata",
    "Build",
    "BuildDefinitionReference",
    "OAuthToken",
    "Release",
    "ReleaseApproval",
    "ReleaseDefinition",
    "ReleaseStartMetadata",
    "TeamProjectReference",
    "UserData",
    "VstsProfile",
]
