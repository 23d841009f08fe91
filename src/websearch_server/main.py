"""Web search server - FastAPI application.

A thin host around the dispatch router: one JSON-RPC style endpoint that
maps protocol method names onto router operations, and a health probe.
Capability faults become JSON-RPC errors; tool failures stay inside a
normal result with ``isError`` set.

Unknown capabilities and malformed params use the standard ``-32602``.
A prompt called without a required argument uses the server-defined
``MISSING_ARGUMENT`` code so clients can tell the two apart.
"""

import json
import uuid
from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, Optional, Union

from fastapi import FastAPI, Request
from pydantic import BaseModel, Field, ValidationError

from shared.config import Settings, get_settings
from shared.logging import bind_context, clear_context, get_logger, setup_logging
from websearch_server.constants import PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from websearch_server.errors import MissingArgumentError, UnknownCapabilityError
from websearch_server.router import DispatchRouter

logger = get_logger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
MISSING_ARGUMENT = -32001


# Request models
class RpcRequest(BaseModel):
    """A JSON-RPC request envelope."""
    jsonrpc: str = Field(default="2.0")
    id: Optional[Union[int, str]] = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)


class ToolCallParams(BaseModel):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class PromptGetParams(BaseModel):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ResourceParams(BaseModel):
    uri: str


class RpcError(Exception):
    """An error reported in the JSON-RPC ``error`` member."""

    def __init__(self, code: int, message: str, data: Optional[dict[str, Any]] = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


# Method handlers
MethodHandler = Callable[[DispatchRouter, dict[str, Any]], Awaitable[dict[str, Any]]]


async def _initialize(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        "capabilities": {
            "tools": {},
            "resources": {"subscribe": True},
            "prompts": {},
        },
    }


async def _ping(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    return {}


async def _list_tools(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    return {"tools": [tool.to_wire() for tool in router.list_tools()]}


async def _call_tool(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    call = ToolCallParams.model_validate(params)
    result = await router.call_tool(call.name, call.arguments)
    return result.to_wire()


async def _list_resources(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    return {"resources": [resource.to_wire() for resource in router.list_resources()]}


async def _read_resource(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    target = ResourceParams.model_validate(params)
    result = await router.read_resource(target.uri)
    return result.to_wire()


async def _subscribe(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    target = ResourceParams.model_validate(params)
    await router.subscribe(target.uri)
    return {}


async def _unsubscribe(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    target = ResourceParams.model_validate(params)
    await router.unsubscribe(target.uri)
    return {}


async def _list_prompts(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    return {"prompts": [prompt.to_wire() for prompt in router.list_prompts()]}


async def _get_prompt(router: DispatchRouter, params: dict[str, Any]) -> dict[str, Any]:
    request = PromptGetParams.model_validate(params)
    result = await router.get_prompt(request.name, request.arguments)
    return result.to_wire()


METHODS: dict[str, MethodHandler] = {
    "initialize": _initialize,
    "ping": _ping,
    "tools/list": _list_tools,
    "tools/call": _call_tool,
    "resources/list": _list_resources,
    "resources/read": _read_resource,
    "resources/subscribe": _subscribe,
    "resources/unsubscribe": _unsubscribe,
    "prompts/list": _list_prompts,
    "prompts/get": _get_prompt,
}


async def dispatch(router: DispatchRouter, request: RpcRequest) -> dict[str, Any]:
    """
    Run one request against the router.

    Raises:
        RpcError: For unknown methods, invalid params and capability faults
    """
    handler = METHODS.get(request.method)
    if handler is None:
        raise RpcError(METHOD_NOT_FOUND, f"Method not found: {request.method}")

    try:
        return await handler(router, request.params)
    except ValidationError as e:
        messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise RpcError(INVALID_PARAMS, "Invalid params", {"errors": messages}) from e
    except UnknownCapabilityError as e:
        raise RpcError(INVALID_PARAMS, str(e), {"kind": e.kind, "name": e.name}) from e
    except MissingArgumentError as e:
        raise RpcError(MISSING_ARGUMENT, str(e), {"argument": e.argument}) from e


def _response(request_id: Any, result: Optional[dict[str, Any]] = None,
              error: Optional[RpcError] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id}
    if error is not None:
        body["error"] = error.to_dict()
    else:
        body["result"] = result
    return body


def create_app(
    router: Optional[DispatchRouter] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        router: Dispatch router to serve, built with defaults at startup when omitted
        settings: Application settings, loaded from the environment when omitted
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings = settings or get_settings()
        setup_logging(app_settings.log_level, json_output=app_settings.json_logs)

        app.state.router = router or DispatchRouter()
        logger.info(
            "Web search server started",
            tools=len(app.state.router.list_tools()),
            resources=len(app.state.router.list_resources()),
            prompts=len(app.state.router.list_prompts()),
        )

        yield

        logger.info("Shutting down web search server")
        await app.state.router.close()

    app = FastAPI(
        title="Web Search MCP Server",
        description="Tools, resources and prompts backed by web search",
        version=SERVER_VERSION,
        lifespan=lifespan
    )

    @app.get("/health", tags=["System"])
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check endpoint."""
        active: DispatchRouter = request.app.state.router
        return {
            "status": "healthy",
            "version": SERVER_VERSION,
            "tools": [tool.name for tool in active.list_tools()],
            "resources": [resource.uri for resource in active.list_resources()],
            "prompts": [prompt.name for prompt in active.list_prompts()],
            "subscriptions": active.subscriptions.snapshot(),
            "history_size": len(active.history),
        }

    @app.post("/mcp", tags=["Protocol"])
    async def handle_rpc(request: Request) -> dict[str, Any]:
        """Protocol endpoint: one JSON-RPC request per call."""
        active: DispatchRouter = request.app.state.router

        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _response(None, error=RpcError(PARSE_ERROR, "Parse error"))

        try:
            rpc = RpcRequest.model_validate(body)
        except ValidationError:
            request_id = body.get("id") if isinstance(body, dict) else None
            return _response(request_id, error=RpcError(INVALID_REQUEST, "Invalid request"))

        bind_context(rpc_id=rpc.id if rpc.id is not None else str(uuid.uuid4()), method=rpc.method)
        try:
            result = await dispatch(active, rpc)
            return _response(rpc.id, result=result)
        except RpcError as e:
            logger.info("Request rejected", code=e.code, error=e.message)
            return _response(rpc.id, error=e)
        except Exception as e:
            logger.error("Request failed", error=str(e), exc_info=True)
            return _response(rpc.id, error=RpcError(INTERNAL_ERROR, "Internal error"))
        finally:
            clear_context()

    return app


app = create_app()


def main():
    """Run the web search server."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "websearch_server.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.environment == "development"
    )


if __name__ == "__main__":
    main()
