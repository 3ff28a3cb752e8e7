"""Dados do usuário guardados no estado do bot (entre turnos)."""
from typing import Optional

from pydantic import BaseModel

from devops_bot.models.devops_models import VstsProfile


class UserData(BaseModel):
    """Conta e team project selecionados e o perfil conectado."""

    account: Optional[str] = None
    team_project: Optional[str] = None
    profile: Optional[VstsProfile] = None

    @property
    def is_connected(self) -> bool:
        """Há perfil com token para chamar o Azure DevOps."""
        return self.profile is not None and self.profile.token is not None

    @property
    def has_project(self) -> bool:
        return bool(self.account and self.team_project)
