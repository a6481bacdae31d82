"""MCP server for uicatalog.

Exposes the front-end catalog (components, APIs, environment variables, style
guide, state management, hooks, conventions) to AI coding agents via the
Model Context Protocol. Every collection is readable as a resource and
editable through get/create/update/delete tools.

Usage:
    uv run python -m uicatalog.mcp_server [--db /path/to/db.json]

Configure in Claude Code (~/.claude.json):
    {
      "mcpServers": {
        "uicatalog": {
          "command": "uv",
          "args": ["run", "--directory", "/path/to/uicatalog", "python", "-m", "uicatalog.mcp_server"]
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import time
from pathlib import Path

import mcp.server.stdio
import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError

from uicatalog.activity import log_tool_call
from uicatalog.catalog.engine import CatalogEngine
from uicatalog.catalog.registry import ENTITY_KINDS, EntityKind, get_kind
from uicatalog.config import DEFAULT_DB_PATH
from uicatalog.errors import CatalogError, StoreIOError, UnknownEntityKindError
from uicatalog.storage.document import JsonDocumentStore

logger = logging.getLogger(__name__)

RESOURCE_SCHEME = "uicatalog"
_RESOURCE_URI = re.compile(rf"^{RESOURCE_SCHEME}://([^/]+)/?$")


def _resolve_db_path() -> Path:
    """Find the catalog file, checking CLI args, env var, then the default."""
    # CLI arg: --db /path/to/db.json
    for i, arg in enumerate(sys.argv):
        if arg == "--db" and i + 1 < len(sys.argv):
            return Path(sys.argv[i + 1])

    env_db = os.getenv("UICATALOG_DB_PATH")
    if env_db:
        return Path(env_db)

    return DEFAULT_DB_PATH


DB_PATH = _resolve_db_path()

server = Server("uicatalog")


def _get_engine() -> CatalogEngine:
    return CatalogEngine(JsonDocumentStore(DB_PATH))


def _invalid_request(message: str) -> McpError:
    return McpError(types.ErrorData(code=types.INVALID_REQUEST, message=message))


def _id_property(entity: EntityKind, purpose: str) -> dict:
    return {"type": "string", "description": f"{entity.label} ID{purpose}"}


def _field_properties(entity: EntityKind) -> dict:
    properties = {}
    for spec in entity.fields:
        prop: dict = {"type": spec.json_type, "description": spec.description}
        if spec.choices:
            prop["enum"] = list(spec.choices)
        properties[spec.name] = prop
    return properties


def build_tools(entity: EntityKind) -> list[types.Tool]:
    """The four tools serving one entity kind."""
    label = entity.label
    return [
        types.Tool(
            name=f"get_{entity.plural}",
            description=f"Get all {label.lower()} records or a specific one by ID",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": _id_property(entity, " (optional) to get a specific record"),
                },
            },
        ),
        types.Tool(
            name=f"create_{entity.singular}",
            description=f"Create a new {label.lower()}",
            inputSchema={
                "type": "object",
                "properties": _field_properties(entity),
                "required": entity.required_fields,
            },
        ),
        types.Tool(
            name=f"update_{entity.singular}",
            description=(
                f"Update an existing {label.lower()}. "
                "Only the fields you pass are changed."
            ),
            inputSchema={
                "type": "object",
                "properties": {"id": _id_property(entity, ""), **_field_properties(entity)},
                "required": ["id"],
            },
        ),
        types.Tool(
            name=f"delete_{entity.singular}",
            description=f"Delete a {label.lower()}",
            inputSchema={
                "type": "object",
                "properties": {"id": _id_property(entity, "")},
                "required": ["id"],
            },
        ),
    ]


# tool name -> (operation, collection key)
TOOL_ROUTES: dict[str, tuple[str, str]] = {}
for _entity in ENTITY_KINDS.values():
    TOOL_ROUTES[f"get_{_entity.plural}"] = ("get", _entity.key)
    TOOL_ROUTES[f"create_{_entity.singular}"] = ("create", _entity.key)
    TOOL_ROUTES[f"update_{_entity.singular}"] = ("update", _entity.key)
    TOOL_ROUTES[f"delete_{_entity.singular}"] = ("delete", _entity.key)


@server.list_tools()
async def list_tools() -> list[types.Tool]:
    tools: list[types.Tool] = []
    for entity in ENTITY_KINDS.values():
        tools.extend(build_tools(entity))
    return tools


@server.call_tool()
async def call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
    start = time.time()
    arguments = arguments or {}
    result: list[types.TextContent] = []
    error: str | None = None
    try:
        result = _dispatch_tool(name, arguments)
        return result
    except StoreIOError as e:
        error = str(e)
        logger.error(f"Tool {name} failed: {e}")
        raise McpError(
            types.ErrorData(code=types.INTERNAL_ERROR, message=f"Tool execution failed: {e}")
        ) from e
    except (CatalogError, McpError) as e:
        error = str(e)
        raise
    finally:
        duration_ms = int((time.time() - start) * 1000)
        result_text = result[0].text if result else ""
        log_tool_call(name, arguments, result_text, error, duration_ms, db_path=DB_PATH)


def _dispatch_tool(name: str, arguments: dict) -> list[types.TextContent]:
    """Route a tool call to the engine operation it names."""
    route = TOOL_ROUTES.get(name)
    if route is None:
        raise _invalid_request(f"Unknown tool: {name}")

    operation, kind = route
    entity = get_kind(kind)
    engine = _get_engine()

    if operation == "get":
        record_id = arguments.get("id")
        if record_id:
            return _json_text(engine.get(kind, record_id))
        return _json_text(engine.list_records(kind))

    if operation == "create":
        return _json_text(engine.create(kind, arguments))

    record_id = arguments.get("id")
    if not record_id:
        raise _invalid_request(f"Tool {name} requires an 'id' argument")

    if operation == "update":
        return _json_text(engine.update(kind, record_id, arguments))

    engine.delete(kind, record_id)
    return [types.TextContent(type="text", text=f"{entity.label} deleted successfully")]


_sdk_call_tool_handler = server.request_handlers[types.CallToolRequest]


async def _checked_call_tool(req: types.CallToolRequest) -> types.ServerResult:
    """Reject unroutable tool calls as JSON-RPC errors.

    The SDK handler turns every exception raised by a tool into an isError
    result, so these checks run before it.
    """
    name = req.params.name
    arguments = req.params.arguments or {}
    route = TOOL_ROUTES.get(name)
    message = None
    if route is None:
        message = f"Unknown tool: {name}"
    elif route[0] in ("update", "delete") and not arguments.get("id"):
        message = f"Tool {name} requires an 'id' argument"

    if message is not None:
        log_tool_call(name, arguments, "", message, 0, db_path=DB_PATH)
        raise _invalid_request(message)
    return await _sdk_call_tool_handler(req)


server.request_handlers[types.CallToolRequest] = _checked_call_tool


def _json_text(payload: dict | list) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))]


@server.list_resources()
async def list_resources() -> list[types.Resource]:
    return [
        types.Resource(
            uri=f"{RESOURCE_SCHEME}://{entity.key}",
            name=f"{entity.label} List",
            description=f"List of all {entity.key} records",
            mimeType="application/json",
        )
        for entity in ENTITY_KINDS.values()
    ]


@server.read_resource()
async def read_resource(uri) -> list[ReadResourceContents]:
    """Return a whole collection, unprojected, as JSON."""
    match = _RESOURCE_URI.match(str(uri))
    if not match:
        raise _invalid_request(f"Invalid resource URI: {uri}")

    kind = match.group(1)
    try:
        records = _get_engine().list_records(kind, summary=False)
    except UnknownEntityKindError as e:
        raise _invalid_request(str(e)) from e
    except StoreIOError as e:
        raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=str(e))) from e

    return [
        ReadResourceContents(
            content=json.dumps(records, indent=2, ensure_ascii=False),
            mime_type="application/json",
        )
    ]


async def main() -> None:
    logger.info(f"uicatalog MCP server running on stdio (catalog: {DB_PATH})")
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


if __name__ == "__main__":
    import asyncio

    from uicatalog.config import Config

    Config.load().configure_logging()
    asyncio.run(main())
