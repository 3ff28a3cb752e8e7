"""FastAPI app: endpoint do Bot Framework (/api/messages) e health."""
import logging
from contextlib import asynccontextmanager

from botbuilder.schema import Activity
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from devops_bot.bot import build_bot
from devops_bot.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

bot_app = build_bot(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    bot_app.telemetry.flush()


app = FastAPI(title="DevOpsBot", description="Bot do Azure DevOps: builds, releases e aprovações", lifespan=lifespan)


@app.post("/api/messages")
async def messages(request: Request):
    """
    Recebe as atividades do canal (mensagens, conversationUpdate).
    A autenticação do Bot Framework é validada pelo adapter a partir do header Authorization.
    """
    if "application/json" not in (request.headers.get("Content-Type") or ""):
        return Response(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)

    body = await request.json()
    activity = Activity().deserialize(body)
    auth_header = request.headers.get("Authorization", "")

    try:
        invoke_response = await bot_app.adapter.process_activity(activity, auth_header, bot_app.bot.on_turn)
    except PermissionError:
        logger.warning("Atividade rejeitada: autenticação inválida")
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)

    if invoke_response:
        return JSONResponse(content=invoke_response.body, status_code=invoke_response.status)
    return Response(status_code=status.HTTP_201_CREATED)


@app.get("/health")
async def health():
    """Health check para monitoramento e deploy."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=3978, reload=True)
