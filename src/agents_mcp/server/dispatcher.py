"""RequestDispatcher: routes JSON-RPC envelopes to MCP method handlers.

Protocol faults (bad envelope, unknown method, bad params) become JSON-RPC
error envelopes.  Tool faults (unknown tool on ``tools/call``, a handler that
raises) become *successful* envelopes whose result carries ``isError: true``:
the protocol worked, the tool did not.
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from opentelemetry import trace
from pydantic import ValidationError

from agents_mcp.config import ServerSettings
from agents_mcp.protocols.errors import (
    JsonRpcErrorCode,
    SchemaIntrospectionError,
    ToolExecutionError,
    ToolNotFoundError,
)
from agents_mcp.protocols.mcp.models import (
    JSONRPC_VERSION,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    ToolCallParams,
    ToolValidateParams,
)
from agents_mcp.registry.content import error_result, is_tool_result, json_result
from agents_mcp.registry.introspector import SchemaIntrospector
from agents_mcp.registry.models import ToolDescriptor
from agents_mcp.utils.telemetry import (
    ATTR_CONFIDENCE,
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_MISSING_PARAMS,
    ATTR_REQUEST_ID,
    ATTR_TOOL_IS_ERROR,
    ATTR_TOOL_NAME,
    get_tracer,
)
from agents_mcp.validation.categorizer import ParameterCategorizer
from agents_mcp.validation.models import RuleSet
from agents_mcp.validation.rules import DEFAULT_RULES
from agents_mcp.validation.validator import ParameterValidator, TypeValidator

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[JsonRpcRequest], Awaitable[JsonRpcResponse]]
ParamsT = TypeVar("ParamsT", bound=ToolCallParams)


class RequestDispatcher:
    """Stateless JSON-RPC front door over a read-only tool registry.

    Usage::

        dispatcher = RequestDispatcher(registry, rules=load_rules("rules.yaml"))
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
        response.to_wire()
    """

    def __init__(
        self,
        registry: Mapping[str, ToolDescriptor],
        *,
        rules: RuleSet | None = None,
        settings: ServerSettings | None = None,
        type_validator: TypeValidator | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or ServerSettings()
        self._introspector = SchemaIntrospector(registry)
        self._validator = ParameterValidator(
            self._introspector,
            ParameterCategorizer(rules or DEFAULT_RULES),
            type_validator=type_validator,
        )
        self._routes: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
            "tools/validate": self._tools_validate,
            "prompts/list": self._prompts_list,
            "prompts/get": self._prompts_get,
            "resources/list": self._resources_list,
            "resources/read": self._resources_read,
        }

    @property
    def registry(self) -> Mapping[str, ToolDescriptor]:
        return self._registry

    @property
    def settings(self) -> ServerSettings:
        return self._settings

    @property
    def methods(self) -> list[str]:
        return list(self._routes)

    async def handle_json(self, raw: str | bytes) -> JsonRpcResponse:
        """Decode a raw request body and dispatch it."""
        try:
            payload = json.loads(raw)
        except ValueError:
            return JsonRpcResponse.fail(None, JsonRpcErrorCode.PARSE_ERROR, "Parse error")
        return await self.handle(payload)

    async def handle(self, payload: Any) -> JsonRpcResponse:
        """Dispatch one request envelope and return its response envelope.

        Never raises for protocol or tool faults; unexpected exceptions become
        a -32603 envelope with a generic message.
        """
        with _tracer.start_as_current_span("mcp.request") as span:
            parsed = payload if isinstance(payload, JsonRpcRequest) else _parse_envelope(payload)
            if isinstance(parsed, JsonRpcResponse):
                response = parsed
            else:
                span.set_attribute(ATTR_METHOD, parsed.method)
                if not parsed.is_notification:
                    span.set_attribute(ATTR_REQUEST_ID, str(parsed.id))
                response = await self._route(parsed)

            if response.is_error:
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
            return response

    async def _route(self, request: JsonRpcRequest) -> JsonRpcResponse:
        if request.jsonrpc != JSONRPC_VERSION:
            return JsonRpcResponse.fail(
                request.id,
                JsonRpcErrorCode.INVALID_REQUEST,
                f'Invalid Request: jsonrpc must be "{JSONRPC_VERSION}"',
            )

        handler = self._routes.get(request.method)
        if handler is None:
            logger.info("Method not found: %s", request.method)
            return JsonRpcResponse.fail(
                request.id, JsonRpcErrorCode.METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

        try:
            return await handler(request)
        except Exception:
            logger.exception("Request handling error for %s", request.method)
            return JsonRpcResponse.fail(
                request.id, JsonRpcErrorCode.INTERNAL_ERROR, "Internal server error"
            )

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest) -> JsonRpcResponse:
        logger.info("Handling initialize")
        return JsonRpcResponse.ok(
            request.id,
            {
                "protocolVersion": self._settings.protocol_version,
                "serverInfo": {
                    "name": self._settings.server_name,
                    "version": self._settings.server_version,
                },
                "capabilities": {
                    "tools": {},
                    "prompts": {},
                    "resources": {"subscribe": False, "listChanged": False},
                    "sampling": {},
                },
            },
        )

    async def _tools_list(self, request: JsonRpcRequest) -> JsonRpcResponse:
        logger.info("Handling tools/list")
        tools = [
            tool.to_definition().model_dump(by_alias=True) for tool in self._registry.values()
        ]
        return JsonRpcResponse.ok(request.id, {"tools": tools})

    async def _tools_call(self, request: JsonRpcRequest) -> JsonRpcResponse:
        params = _parse_params(ToolCallParams, request)
        if isinstance(params, JsonRpcResponse):
            return params

        span = trace.get_current_span()
        span.set_attribute(ATTR_TOOL_NAME, params.name)
        logger.info("Handling tools/call for: %s", params.name)

        tool = self._registry.get(params.name)
        if tool is None:
            span.set_attribute(ATTR_TOOL_IS_ERROR, True)
            return JsonRpcResponse.ok(
                request.id, error_result(str(ToolNotFoundError(params.name)))
            )

        try:
            result = tool.handler(dict(params.arguments))
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            logger.exception("Error executing tool %s", params.name)
            span.set_attribute(ATTR_TOOL_IS_ERROR, True)
            return JsonRpcResponse.ok(
                request.id, error_result(str(ToolExecutionError(params.name, str(exc))))
            )

        try:
            payload = result if is_tool_result(result) else json_result(result)
            # The transport encodes with allow_nan=False; reject what it would.
            json.dumps(payload, allow_nan=False)
            response = JsonRpcResponse.ok(request.id, payload)
        except (TypeError, ValueError) as exc:
            logger.error(
                "Tool %s returned a result that is not JSON-serializable: %s", params.name, exc
            )
            span.set_attribute(ATTR_TOOL_IS_ERROR, True)
            error = ToolExecutionError(params.name, "result is not JSON-serializable")
            return JsonRpcResponse.ok(request.id, error_result(str(error)))

        span.set_attribute(ATTR_TOOL_IS_ERROR, bool(payload.get("isError", False)))
        return response

    async def _tools_validate(self, request: JsonRpcRequest) -> JsonRpcResponse:
        params = _parse_params(ToolValidateParams, request)
        if isinstance(params, JsonRpcResponse):
            return params

        span = trace.get_current_span()
        span.set_attribute(ATTR_TOOL_NAME, params.name)
        logger.info("Handling tools/validate for: %s", params.name)

        if params.name not in self._registry:
            return JsonRpcResponse.fail(
                request.id, JsonRpcErrorCode.INVALID_PARAMS, str(ToolNotFoundError(params.name))
            )

        try:
            report = self._validator.validate(params.name, params.arguments, params.context)
        except SchemaIntrospectionError as exc:
            logger.error("Schema introspection failed: %s", exc)
            return JsonRpcResponse.fail(
                request.id,
                JsonRpcErrorCode.INTERNAL_ERROR,
                f"Could not get schema for tool: {params.name}",
            )
        except Exception:
            logger.exception("Error validating tool %s", params.name)
            return JsonRpcResponse.fail(
                request.id, JsonRpcErrorCode.INTERNAL_ERROR, f"Error validating tool: {params.name}"
            )

        span.set_attribute(ATTR_MISSING_PARAMS, len(report.missing_params))
        span.set_attribute(ATTR_CONFIDENCE, report.confidence)
        return JsonRpcResponse.ok(request.id, report.model_dump(by_alias=True))

    async def _prompts_list(self, request: JsonRpcRequest) -> JsonRpcResponse:
        logger.info("Handling prompts/list")
        return JsonRpcResponse.ok(request.id, {"prompts": []})

    async def _prompts_get(self, request: JsonRpcRequest) -> JsonRpcResponse:
        name = request.params.get("name")
        logger.info("Handling prompts/get for: %s", name)
        return JsonRpcResponse.fail(
            request.id,
            JsonRpcErrorCode.INVALID_PARAMS,
            f"Unknown prompt: {name}. Prompts are available on the remote MCP server.",
        )

    async def _resources_list(self, request: JsonRpcRequest) -> JsonRpcResponse:
        logger.info("Handling resources/list")
        return JsonRpcResponse.ok(request.id, {"resources": []})

    async def _resources_read(self, request: JsonRpcRequest) -> JsonRpcResponse:
        uri = request.params.get("uri")
        logger.info("Handling resources/read for: %s", uri)
        return JsonRpcResponse.fail(
            request.id,
            JsonRpcErrorCode.INVALID_PARAMS,
            f"Resource not found: {uri}. Resources are available on the remote MCP server.",
        )


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _echo_id(payload: Mapping[str, Any]) -> RequestId:
    """Return the envelope's id if it is a legal JSON-RPC id, else ``None``."""
    value = payload.get("id")
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    return value


def _parse_envelope(payload: Any) -> JsonRpcRequest | JsonRpcResponse:
    """Validate the envelope shape; return the request or a -32600 response."""
    if not isinstance(payload, Mapping):
        return JsonRpcResponse.fail(
            None, JsonRpcErrorCode.INVALID_REQUEST, "Invalid Request: expected a JSON object"
        )

    request_id = _echo_id(payload)
    if request_id is None and payload.get("id") is not None:
        return JsonRpcResponse.fail(
            None,
            JsonRpcErrorCode.INVALID_REQUEST,
            "Invalid Request: id must be a string, number or null",
        )

    if payload.get("jsonrpc") != JSONRPC_VERSION:
        return JsonRpcResponse.fail(
            request_id,
            JsonRpcErrorCode.INVALID_REQUEST,
            f'Invalid Request: jsonrpc must be "{JSONRPC_VERSION}"',
        )

    if not isinstance(payload.get("method"), str):
        return JsonRpcResponse.fail(
            request_id, JsonRpcErrorCode.INVALID_REQUEST, "Invalid Request: method must be a string"
        )

    try:
        return JsonRpcRequest.model_validate({**payload, "id": request_id})
    except ValidationError:
        return JsonRpcResponse.fail(
            request_id, JsonRpcErrorCode.INVALID_REQUEST, "Invalid Request: params must be an object"
        )


def _parse_params(
    model: type[ParamsT],
    request: JsonRpcRequest,
) -> ParamsT | JsonRpcResponse:
    """Validate ``params`` against *model*; return the model or a -32602 response."""
    name = request.params.get("name")
    if not isinstance(name, str) or not name:
        return JsonRpcResponse.fail(
            request.id, JsonRpcErrorCode.INVALID_PARAMS, "Tool name is required"
        )
    try:
        return model.model_validate(request.params)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        return JsonRpcResponse.fail(
            request.id,
            JsonRpcErrorCode.INVALID_PARAMS,
            f"Invalid params for {request.method}: {', '.join(fields)}",
        )
