"""
HTTP facade for the instruction service.

Built on ``aiohttp``. Every handler reads a JSON object, runs one operation
from ``api.routes`` and answers with the uniform envelope:

    200  {"success": true,  "data": {...}}
    400  {"success": false, "error": "..."}

Endpoints
---------
GET  /                Liveness greeting
POST /keypair         Generate a keypair
POST /token/create    initialize_mint instruction
POST /token/mint      mint_to instruction
POST /message/sign    Sign a UTF-8 message
POST /message/verify  Verify a message signature
POST /send/sol        System transfer instruction
POST /send/token      SPL transfer instruction

Usage:
    api = APIServer(config)
    await api.start()
    ...
    await api.stop()
"""

import json
import time
from typing import Any, Awaitable, Callable

from aiohttp import web

from api import routes
from interfaces.core import ApiResponse
from interfaces.errors import InvalidRequestBody, ServiceError
from utils.logger import get_logger

logger = get_logger(__name__)

Operation = Callable[[dict[str, Any]], dict[str, Any]]
Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


async def _read_json_object(request: web.Request) -> dict[str, Any]:
    """Decode the request body as a JSON object."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequestBody()
    if not isinstance(body, dict):
        raise InvalidRequestBody("Request body must be a JSON object")
    return body


def json_endpoint(operation: Operation, read_body: bool = True) -> Handler:
    """Wrap an operation into an aiohttp handler that returns the envelope.

    Args:
        operation: Callable taking the request body and returning response data
        read_body: Whether the endpoint expects a JSON body

    Returns:
        aiohttp request handler
    """
    async def handler(request: web.Request) -> web.Response:
        try:
            body = await _read_json_object(request) if read_body else {}
            response = ApiResponse.ok(operation(body))
        except ServiceError as e:
            logger.warning(f"{request.method} {request.path} rejected: {e.message}")
            response = ApiResponse.fail(e)
        return web.json_response(response.to_dict(), status=response.status)

    return handler


@web.middleware
async def request_logging_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Log one line per request with its status and duration."""
    started = time.monotonic()
    try:
        response = await handler(request)
    except web.HTTPException as e:
        logger.info(f"{request.remote} {request.method} {request.path} -> {e.status}")
        raise
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        raise

    elapsed_ms = (time.monotonic() - started) * 1000
    logger.info(
        f"{request.remote} {request.method} {request.path} -> {response.status} "
        f"({elapsed_ms:.1f} ms)"
    )
    return response


def register_routes(app: web.Application) -> None:
    app.router.add_get("/", json_endpoint(routes.hello, read_body=False))
    app.router.add_post("/keypair", json_endpoint(routes.generate_keypair, read_body=False))
    app.router.add_post("/token/create", json_endpoint(routes.create_token))
    app.router.add_post("/token/mint", json_endpoint(routes.mint_token))
    app.router.add_post("/message/sign", json_endpoint(routes.sign_message))
    app.router.add_post("/message/verify", json_endpoint(routes.verify_message))
    app.router.add_post("/send/sol", json_endpoint(routes.send_sol))
    app.router.add_post("/send/token", json_endpoint(routes.send_token))


def create_app(config: dict | None = None) -> web.Application:
    """Create the aiohttp application.

    Args:
        config: Loaded server configuration; defaults apply when None

    Returns:
        Application with all routes registered
    """
    server_cfg = (config or {}).get("server", {})

    middlewares: list = []
    if server_cfg.get("access_log", True):
        middlewares.append(request_logging_middleware)

    app = web.Application(
        middlewares=middlewares,
        client_max_size=server_cfg.get("max_body_bytes", 64 * 1024),
    )
    register_routes(app)
    return app


class APIServer:
    """Runs the application on a TCP site inside an existing event loop."""

    def __init__(self, config: dict):
        self.config = config
        self.host = config["server"]["host"]
        self.port = config["server"]["port"]
        self._app: web.Application | None = None
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        self._app = create_app(self.config)
        # Requests are logged by request_logging_middleware
        self._runner = web.AppRunner(self._app, access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info(f"HTTP API listening on {self.host}:{self.port}")

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("HTTP API stopped")
