"""Telemetria best-effort: Application Insights quando configurado, sempre no log."""
import logging
from typing import Any, Optional

from applicationinsights import TelemetryClient
from applicationinsights.channel import AsynchronousQueue, AsynchronousSender, TelemetryChannel

from devops_bot.config import Settings, settings

logger = logging.getLogger(__name__)


class Telemetry:
    """
    Registro de eventos que nunca interrompe a conversa: qualquer falha do
    cliente de telemetria é logada e descartada.
    """

    def __init__(self, client: Optional[TelemetryClient] = None) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "Telemetry":
        key = ((config or settings).APPINSIGHTS_INSTRUMENTATION_KEY or "").strip()
        if not key:
            logger.info("Application Insights não configurado; eventos apenas no log")
            return cls()
        # fila e envio em thread própria: track_event nunca faz HTTP no event loop
        channel = TelemetryChannel(None, AsynchronousQueue(AsynchronousSender()))
        return cls(TelemetryClient(key, telemetry_channel=channel))

    def track_event(self, name: str, properties: dict[str, Any] | None = None) -> None:
        logger.info("Telemetry Event: %s", name, extra={"properties": properties or {}})
        if self.client is None:
            return
        try:
            self.client.track_event(name, properties=properties)
        except Exception as e:
            logger.warning("Falha ao registrar evento de telemetria %r: %s", name, e)

    def track_exception(self, error: BaseException, properties: dict[str, Any] | None = None) -> None:
        if self.client is None:
            return
        try:
            self.client.track_exception(type(error), error, error.__traceback__, properties=properties)
        except Exception as e:
            logger.warning("Falha ao registrar exceção na telemetria: %s", e)

    def flush(self) -> None:
        if self.client is None:
            return
        try:
            self.client.flush()
        except Exception as e:
            logger.warning("Falha ao enviar telemetria: %s", e)
