"""HTTP surface of the asset gateway (FastAPI)."""

import logging
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from multichain_assets.core.errors import AssetGatewayError, InvalidInputError, RateLimitedError
from multichain_assets.data.loader import Settings, load_settings
from multichain_assets.gateway.service import AssetGateway

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https: blob:; "
        "font-src 'self' data:; "
        "connect-src 'self' https: wss:; "
        "frame-ancestors 'none'"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

router = APIRouter()


def get_gateway(request: Request) -> AssetGateway:
    return request.app.state.gateway


@router.get("/api/assets")
async def get_assets(
    request: Request,
    address: str | None = None,
    chain: str | None = None,
    include_nfts: str | None = None,
) -> JSONResponse:
    result = await get_gateway(request).handle(address, chain, include_nfts=include_nfts == "true")
    return JSONResponse(result.to_response().to_wire())


@router.post("/api/rpc/{chain}")
async def proxy_rpc(request: Request, chain: str) -> JSONResponse:
    try:
        payload: Any = await request.json()
    except ValueError as e:
        msg = "Invalid JSON body"
        raise InvalidInputError(msg) from e
    if not isinstance(payload, dict):
        msg = "Request body must be a JSON object"
        raise InvalidInputError(msg)

    body = await get_gateway(request).proxy(
        chain,
        endpoint=payload.get("endpoint"),
        method=payload.get("method"),
        params=payload.get("params"),
    )
    return JSONResponse(body)


@router.options("/api/{path:path}")
async def preflight(path: str) -> Response:
    return Response(status_code=204)


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    return {"status": "ok", "chains": get_gateway(request).wired_chains}


async def handle_gateway_error(request: Request, exc: AssetGatewayError) -> JSONResponse:
    """Translate a gateway error into ``{"error": message}`` with its status."""
    headers = {}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.warning("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
    if isinstance(exc, RateLimitedError):
        headers["Retry-After"] = str(math.ceil(exc.retry_after))
    return JSONResponse({"error": exc.message}, status_code=exc.status_code, headers=headers)


def create_app(settings: Settings | None = None, client: httpx.AsyncClient | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters
    ----------
    settings : Settings | None
        Process settings (default: ``load_settings()``)
    client : httpx.AsyncClient | None
        HTTP client to use for upstream calls. When omitted, the app creates
        one at startup and closes it at shutdown.

    Returns
    -------
    FastAPI
        Configured application

    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if client is not None:
            yield
            return
        async with httpx.AsyncClient() as http_client:
            app.state.gateway = AssetGateway(settings, http_client)
            logger.info("Asset gateway ready for %s", ", ".join(app.state.gateway.wired_chains))
            yield

    app = FastAPI(
        title="Multichain Assets API",
        description="Normalized token balances and NFTs across Sui, Aptos, Sei and EVM chains.",
        version="0.1.0",
        lifespan=lifespan,
    )
    if client is not None:
        app.state.gateway = AssetGateway(settings, client)

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next: Any) -> Response:
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            response = JSONResponse({"error": "Internal server error"}, status_code=500)
        response.headers.update(SECURITY_HEADERS)
        return response

    app.add_exception_handler(AssetGatewayError, handle_gateway_error)
    app.include_router(router)
    return app
