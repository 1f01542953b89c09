from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from assistant_core import ChatEngine, ChatValidationError
from assistant_providers import ProviderOrchestrator, ProviderSettings
from chat_memory import ConversationStore

_ENV_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _read_env_file(path: Path) -> dict[str, str]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    values: dict[str, str] = {}
    for raw in text.splitlines():
        key, sep, value = raw.strip().partition("=")
        key = key.strip()
        if not sep or not _ENV_KEY_RE.fullmatch(key):
            continue
        value = value.strip()
        if value[:1] in {"'", '"'} and len(value) >= 2 and value.endswith(value[0]):
            value = value[1:-1]
        values[key] = value
    return values


def _bootstrap_local_env() -> None:
    # Real environment variables always win over .env entries.
    repo_root = Path(__file__).resolve().parents[1]
    for candidate in (repo_root / ".env", repo_root / "backend" / ".env"):
        for key, value in _read_env_file(candidate).items():
            os.environ.setdefault(key, value)


_bootstrap_local_env()

logging.basicConfig(
    level=os.getenv("MEDITRACK_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("meditrack.chat")


class ChatRequest(BaseModel):
    message: str | None = None
    conversationId: str | None = None
    context: str | None = None


class AssistantApp:
    def __init__(self) -> None:
        self.settings = ProviderSettings.from_env()
        self.store = ConversationStore()
        self.orchestrator = ProviderOrchestrator(self.settings)
        self.engine = ChatEngine(store=self.store, orchestrator=self.orchestrator)
        logger.info("chat providers enabled: %s", ", ".join(self.orchestrator.stage_names()))


container = AssistantApp()
app = FastAPI(title="MediTrack Assistant")

allowed_origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8080").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ChatValidationError)
async def chat_validation_error_handler(request: Request, exc: ChatValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "message": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request body. A text message is required."},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Sorry, something went wrong while processing your message. Please try again.",
        },
    )


router = APIRouter()


@router.post("/chat")
def chat_message(payload: ChatRequest):
    reply = container.engine.respond(payload.conversationId, payload.message, payload.context)
    return {"success": True, "data": reply.as_dict()}


@router.get("/conversation/{conversation_id}")
def get_conversation(conversation_id: str):
    messages = container.engine.conversation(conversation_id)
    return {"success": True, "data": [message.as_dict() for message in messages]}


@router.delete("/conversation/{conversation_id}")
def clear_conversation(conversation_id: str):
    container.engine.clear(conversation_id)
    return {"success": True, "message": "Conversation cleared successfully"}


@router.get("/health")
def health():
    return {
        "status": "ok",
        "providers": container.orchestrator.stage_names(),
        "conversations": len(container.store.conversation_ids()),
    }


app.include_router(router)
app.include_router(router, prefix="/api/chatbot")
