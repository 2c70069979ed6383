"""FastAPI application entry point for the PartSelect parts assistant."""

import logging
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from parts_agent.api.parts import create_parts_router
from parts_agent.api.schemas import ChatRequest, ChatResponse
from parts_agent.assembler import ResponseAssembler
from parts_agent.chat import ChatService
from parts_agent.core.config import get_settings
from parts_agent.core.db import table_names
from parts_agent.core.errors import unhandled_exception_handler, validation_exception_handler
from parts_agent.core.logging import configure_logging, request_id_middleware
from parts_agent.core.metrics import MetricsCollector
from parts_agent.memory.store import SQLiteMemoryStore
from parts_agent.planner.simple import RuleBasedPlanner
from parts_agent.planner.types import Strategy
from parts_agent.services.assistant import AssistantClient
from parts_agent.services.catalog import StaticCatalog
from parts_agent.services.contact import ContactService
from parts_agent.services.handoff import HandoffService
from parts_agent.services.installation import InstallationGuideService
from parts_agent.services.orders import OrderService
from parts_agent.services.scope import ScopeGate
from parts_agent.tools import (
    CompatibilityTool,
    FallbackTool,
    HandoffTool,
    InstallationTool,
    ToolRouter,
    TransactionTool,
    TroubleshootingTool,
)

settings = get_settings()
logger = logging.getLogger("parts_agent.app")

memory_store = SQLiteMemoryStore(settings.sqlite_path)
catalog = StaticCatalog()
guides = InstallationGuideService(catalog)
scope_gate = ScopeGate()
handoff_service = HandoffService(settings.sqlite_path)
assistant = AssistantClient(settings, catalog, scope_gate)
planner = RuleBasedPlanner()
metrics = MetricsCollector()
tool_router = ToolRouter(
    {
        Strategy.TRANSACTION: TransactionTool(OrderService()),
        Strategy.HANDOFF: HandoffTool(handoff_service),
        Strategy.INSTALLATION: InstallationTool(guides),
        Strategy.COMPATIBILITY: CompatibilityTool(catalog),
        Strategy.TROUBLESHOOTING: TroubleshootingTool(scope_gate),
    },
    fallback=FallbackTool(assistant),
)
assembler = ResponseAssembler(catalog, guides, ContactService())
chat_service = ChatService(
    memory_store,
    planner,
    tool_router,
    assembler,
    metrics,
    history_window=settings.history_window,
)

app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

app.include_router(create_parts_router(catalog))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/ready", tags=["health"])
async def readiness_probe() -> dict[str, Any]:
    """Readiness endpoint that verifies critical dependencies.

    Checks:
    - Conversations SQLite DB reachable and has expected tables.
    - Parts catalog loaded.
    """

    components: dict[str, dict[str, Any]] = {}

    conv_ok = False
    conv_error: str | None = None
    try:
        tables = table_names(settings.sqlite_path)
        missing = {"conversations", "messages", "handoff_tickets"} - tables
        conv_ok = not missing
        if missing:
            conv_error = f"missing tables: {', '.join(sorted(missing))}"
    except Exception as exc:  # noqa: BLE001
        conv_error = str(exc)
    components["conversations_db"] = {
        "path": str(settings.sqlite_path),
        "ok": conv_ok,
        **({"error": conv_error} if conv_error else {}),
    }

    part_count = len(catalog)
    components["catalog"] = {
        "parts": part_count,
        "ok": part_count > 0,
    }

    overall = (
        "ok"
        if components["conversations_db"]["ok"] and components["catalog"]["ok"]
        else ("degraded" if components["conversations_db"]["ok"] else "fail")
    )

    return {
        "status": overall,
        "environment": settings.environment,
        "llm_enabled": settings.llm_enabled,
        "components": components,
    }


def get_memory_store() -> SQLiteMemoryStore:
    """Dependency injector for the memory store."""

    return memory_store


def get_chat_service() -> ChatService:
    return chat_service


@app.get("/conversations", tags=["conversations"])
async def list_conversations(store: SQLiteMemoryStore = Depends(get_memory_store)) -> list[str]:
    """List known conversation identifiers (development helper)."""

    return list(store.iter_conversations())


@app.get("/conversations/{conversation_id}/messages", tags=["conversations"])
async def conversation_messages(
    conversation_id: str,
    store: SQLiteMemoryStore = Depends(get_memory_store),
) -> list[dict[str, Any]]:
    """Return the stored transcript of a conversation."""

    if store.get_conversation(conversation_id) is None:
        raise HTTPException(status_code=404, detail="conversation not found")

    return [
        {
            "role": turn.role,
            "content": turn.content,
            "createdAt": turn.created_at.isoformat(),
            "productCards": [card.model_dump(by_alias=True) for card in turn.product_cards],
            "strategy": turn.metadata.get("strategy"),
        }
        for turn in store.get_messages(conversation_id)
    ]


@app.post(
    "/chat",
    tags=["chat"],
    response_model=ChatResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def chat(payload: ChatRequest, service: ChatService = Depends(get_chat_service)) -> ChatResponse:
    """Primary chat endpoint: route the message, answer it and store the exchange."""

    result = await service.handle(payload.conversation_id, payload.message)
    return ChatResponse(
        text=result.text,
        product_cards=result.product_cards or None,
        conversation_id=result.conversation_id,
    )


@app.on_event("startup")
async def configure_app_logging() -> None:
    level = configure_logging(settings.log_level)
    logger.info(
        "Logging configured at %s level for %s environment",
        logging.getLevelName(level),
        settings.environment,
    )


app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    snapshot = metrics.snapshot()
    return {
        "total_requests": snapshot.total_requests,
        "strategies": snapshot.strategies,
        "intents": snapshot.intents,
        "fallthroughs": snapshot.fallthroughs,
    }
