"""Conexão REST com o Azure DevOps: uma sessão por chamada, sempre fechada ao sair."""
import logging
from typing import Any, Callable
from urllib.parse import quote

import requests

from devops_bot.config import settings
from devops_bot.models.devops_models import OAuthToken

logger = logging.getLogger(__name__)

VSTS_URL = "https://{account}.visualstudio.com"
VSRM_URL = "https://{account}.vsrm.visualstudio.com"
VSTS_APP_URL = "https://app.vssps.visualstudio.com"


def account_url(account: str) -> str:
    """Endpoint da conta (core, build, projetos)."""
    return VSTS_URL.format(account=account.strip())


def release_url(account: str) -> str:
    """Endpoint de Release Management da mesma conta."""
    return VSRM_URL.format(account=account.strip())


class VstsConnection:
    """Cliente REST escopado a um endpoint e a um token (bearer)."""

    def __init__(
        self,
        base_url: str,
        token: OAuthToken,
        *,
        api_version: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version or settings.VSTS_API_VERSION
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def _url(self, path: str, project: str | None = None) -> str:
        if project:
            return f"{self.base_url}/{quote(project, safe='', encoding='utf-8')}/_apis/{path}"
        return f"{self.base_url}/_apis/{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        project: str | None = None,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        """Executa a chamada e devolve o JSON. Erros HTTP sobem como requests.HTTPError."""
        url = self._url(path, project)
        query = {"api-version": self.api_version, **(params or {})}
        logger.debug("%s %s", method, url)
        r = self.session.request(method=method, url=url, params=query, json=json, timeout=self.timeout)
        r.raise_for_status()
        # Token inválido: o serviço redireciona para a página de login (HTML) em vez de 401
        if "text/html" in (r.headers.get("Content-Type") or "") or "/_signin" in (r.url or ""):
            raise requests.HTTPError(f"Resposta não autenticada de {url} (status {r.status_code})", response=r)
        if not r.content:
            return None
        return r.json()

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def get_list(self, path: str, **kwargs) -> list[dict]:
        """GET em coleção: a API devolve {"count": n, "value": [...]}."""
        data = self.get(path, **kwargs) or {}
        return list(data.get("value", []))

    def post(self, path: str, body: Any, **kwargs) -> Any:
        return self.request("POST", path, json=body, **kwargs)

    def patch(self, path: str, body: Any, **kwargs) -> Any:
        return self.request("PATCH", path, json=body, **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "VstsConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# Fábrica (endpoint, token) -> conexão; injetável nos testes
ConnectionFactory = Callable[[str, OAuthToken], VstsConnection]
