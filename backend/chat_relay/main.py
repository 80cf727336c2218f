"""Chat Relay API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RelayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, completion client, and chat gateway created once on startup via lifespan,
      stored on app.state, and closed only on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Capability handles on app.state + Depends: no ambient globals in services,
      fakes injected in tests through dependency_overrides
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat_relay.api.error_handlers import register_error_handlers
from chat_relay.api.routes import chat, health, users
from chat_relay.config import get_settings
from chat_relay.infrastructure import database
from chat_relay.infrastructure.anthropic_client import AnthropicCompletionClient
from chat_relay.infrastructure.observability import setup_logging
from chat_relay.infrastructure.stream_chat_client import StreamChatGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.completion_client = AnthropicCompletionClient(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        max_tokens=settings.anthropic_max_tokens,
        system_prompt=settings.assistant_system_prompt,
        max_retries=settings.anthropic_max_retries,
        timeout_seconds=settings.anthropic_timeout_seconds,
    )
    app.state.chat_gateway = StreamChatGateway(
        api_key=settings.stream_api_key,
        api_secret=settings.stream_api_secret,
        timeout_seconds=settings.stream_timeout_seconds,
    )
    logger.info("Chat relay API started")
    yield
    logger.info("Chat relay API shutting down")
    await app.state.chat_gateway.close()
    await app.state.completion_client.close()
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Chat Relay API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(chat.router)

register_error_handlers(app)
