import contextlib
import logging

from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import (
    JSONResponse,
    PlainTextResponse,
    Response,
    StreamingResponse,
)
from starlette.routing import Route

from app import config, sse
from app.log import setup_logging
from domain.aopenai import CompletionClient, GatewayClient, openai_client_factory
from domain.errors import ConfigurationError, InvalidInput, KitchenError
from domain.models import transcript_from_body
from domain.orchestrator import Orchestrator


logger = logging.getLogger(__name__)


CONFIG = config.Config()


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def gateway_client(cfg: config.Config) -> CompletionClient | None:
    if not cfg.gateway_api_key:
        return None
    return GatewayClient(
        openai_client_factory(
            cfg.gateway_api_key,
            base_url=cfg.gateway_url,
            timeout=cfg.request_timeout,
        ),
        model=cfg.core_model,
    )


def error_response(error: KitchenError) -> JSONResponse:
    return JSONResponse(
        {"error": error.message},
        status_code=error.status_code,
        headers=CORS_HEADERS,
    )


async def http_error(request: Request, exc: Exception) -> Response:
    assert isinstance(exc, HTTPException)
    return PlainTextResponse(
        exc.detail,
        status_code=exc.status_code,
        headers={**(exc.headers or {}), **CORS_HEADERS},
    )


async def chat(request: Request) -> Response:
    if request.method == "OPTIONS":
        return Response(None, headers=CORS_HEADERS)

    cfg: config.Config = request.app.state.config
    try:
        try:
            body = await request.json()
        except ValueError:
            raise InvalidInput("Request body must be valid JSON.")
        transcript = transcript_from_body(body)

        client: CompletionClient | None = request.app.state.client
        if client is None:
            raise ConfigurationError("LOVABLE_API_KEY is not configured")
    except KitchenError as e:
        logger.warning("Rejected chat request: %s", e.message)
        return error_response(e)

    logger.info(
        "Chat request with %d messages (%s mode).",
        len(transcript),
        "multi-agent" if cfg.multi_agent else "single-agent",
    )
    orchestrator = Orchestrator(client, multi_agent=cfg.multi_agent)
    events = orchestrator.run(transcript, is_cancelled=request.is_disconnected)
    return StreamingResponse(
        sse.frames(events, request, done_sentinel=cfg.sse_done_sentinel),
        media_type="text/event-stream",
        headers=CORS_HEADERS,
    )


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    setup_logging(app.state.config.log_level)
    if app.state.client is None:
        logger.warning("LOVABLE_API_KEY is not configured, chat requests will fail.")
    yield
    if isinstance(app.state.client, GatewayClient):
        await app.state.client.close()


def create_app(
    cfg: config.Config | None = None,
    client: CompletionClient | None = None,
) -> Starlette:
    cfg = CONFIG if cfg is None else cfg
    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", chat, methods=["POST", "OPTIONS"]),
            Route("/chat", chat, methods=["POST", "OPTIONS"]),
        ],
        lifespan=lifespan,
        exception_handlers={HTTPException: http_error},
    )
    app.state.config = cfg
    app.state.client = gateway_client(cfg) if client is None else client
    return app


app = create_app()
