"""Configurações do bot usando Pydantic Settings."""
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"


class Settings(BaseSettings):
    """Configurações da aplicação com validação automática."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Bot Framework (autenticação do canal)
    MICROSOFT_APP_ID: str = Field(
        default="",
        description="App ID do registro do bot no Bot Framework",
    )
    MICROSOFT_APP_PASSWORD: str = Field(
        default="",
        description="Senha (secret) do registro do bot no Bot Framework",
    )
    EMULATOR_LISTENING_URL: str = Field(
        default="",
        description="URL do Bot Framework Emulator (somente para depuração local)",
    )
    DEBUG: bool = Field(
        default=False,
        description="Modo depuração: habilita o override do emulador",
    )

    # Aplicação OAuth registrada no Azure DevOps. Lidas pelo fluxo externo de
    # autorização que grava perfil e token do usuário; o bot não as consome.
    APP_ID: str = Field(
        default="",
        description="ID da aplicação OAuth no Azure DevOps",
    )
    APP_SECRET: str = Field(
        default="",
        description="Client secret da aplicação OAuth no Azure DevOps",
    )
    AUTHORIZE_URL: str = Field(
        default="",
        description="URL de callback do fluxo OAuth (authorize)",
    )
    APP_SCOPE: str = Field(
        default="vso.build_execute vso.project vso.release_manage",
        description="Escopos solicitados na autorização OAuth",
    )

    # Azure DevOps REST
    VSTS_API_VERSION: str = Field(
        default="7.1",
        description="api-version usada nas chamadas REST",
    )
    REQUEST_TIMEOUT: int = Field(
        default=30,
        description="Timeout (segundos) por requisição REST",
    )

    EULA_URL: str = Field(
        default="https://aka.ms/vsar-tsbot-eula",
        description="Link do EULA exibido na mensagem de boas-vindas",
    )

    # Telemetria
    APPINSIGHTS_INSTRUMENTATION_KEY: str = Field(
        default="",
        description="Instrumentation key do Application Insights (vazio = só log)",
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    @field_validator("DEBUG", mode="before")
    @classmethod
    def parse_debug(cls, v: object) -> bool:
        """Aceita 1/true/yes; qualquer outro valor (ou vazio) vira False."""
        if v is None:
            return False
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes")
        return False

    @field_validator("REQUEST_TIMEOUT", mode="before")
    @classmethod
    def parse_request_timeout(cls, v: object) -> int:
        """Timeout vazio ou inválido volta ao padrão de 30s."""
        try:
            value = int(v)
        except (TypeError, ValueError):
            return 30
        return value if value > 0 else 30

    @property
    def emulator_url(self) -> str | None:
        """URL do emulador, somente quando em depuração e configurada."""
        url = (self.EMULATOR_LISTENING_URL or "").strip()
        if self.DEBUG and url:
            return url
        return None


settings = Settings()
