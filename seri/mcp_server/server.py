"""
MCP Server Implementation
=========================

Model Context Protocol server providing tools for compiling Seri
documents: compile_schedule and validate_schedule. Results are returned
as JSON text; a document that does not compile yields success=false and
its diagnostic rather than a protocol error.
"""

import asyncio
import json
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.types import LoggingLevel, Resource, ServerCapabilities, TextContent, Tool

from seri.config.logging import get_logger, setup_logging
from seri.config.settings import get_settings
from seri.core.compiler import build_options, check_schedule, compile_source
from seri.core.errors import SeriError
from seri.mcp_server.resources import GRAMMAR_URI, read_grammar
from seri.models.schemas import OutputFormat, ValidationResponse

logger = get_logger(__name__)


def _text(payload: Dict[str, Any]) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


class SeriMCPServer:
    """MCP server wrapping the Seri compiler."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.logger: Any = logger.bind(component="mcp_server")  # structlog.BoundLoggerBase
        self.server = Server("seri")
        self._setup_tools()
        self._setup_resources()
        self._setup_handlers()

    def _setup_tools(self) -> None:
        """Setup MCP tools."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            """List available MCP tools."""
            return [
                Tool(
                    name="compile_schedule",
                    description="Compile a Seri schedule document to a TikZ or HTML timetable",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "source": {
                                "type": "string",
                                "description": "Seri source text",
                            },
                            "output_format": {
                                "type": "string",
                                "enum": [fmt.value for fmt in OutputFormat],
                                "description": "Output format",
                                "default": self.settings.default_format,
                            },
                            "template": {
                                "type": "string",
                                "description": "Template text with a {{ CALENDAR }} insertion point",
                            },
                            "standalone": {
                                "type": "boolean",
                                "description": "Wrap the output in the bundled template",
                                "default": False,
                            },
                            "strict": {
                                "type": "boolean",
                                "description": "Reject sessions without a start time or duration",
                                "default": False,
                            },
                            "sort_sessions": {
                                "type": "boolean",
                                "description": "Sort sessions by start time before checking",
                                "default": False,
                            },
                        },
                        "required": ["source"],
                    },
                ),
                Tool(
                    name="validate_schedule",
                    description="Validate a Seri schedule document without rendering it",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "source": {
                                "type": "string",
                                "description": "Seri source text",
                            },
                            "strict": {
                                "type": "boolean",
                                "description": "Reject sessions without a start time or duration",
                                "default": False,
                            },
                            "sort_sessions": {
                                "type": "boolean",
                                "description": "Sort sessions by start time before checking",
                                "default": False,
                            },
                        },
                        "required": ["source"],
                    },
                ),
            ]

        # Store reference to handler for public API
        self._list_tools_handler = handle_list_tools

        @self.server.call_tool()
        async def handle_call_tool(  # type: ignore[misc]
            name: str, arguments: Dict[str, Any]
        ) -> List[TextContent]:
            """Handle tool execution."""
            return await self.call_tool(name, arguments)

    def _setup_resources(self) -> None:
        """Setup MCP resources."""

        @self.server.list_resources()
        async def handle_list_resources() -> List[Resource]:  # type: ignore[misc]
            """List available resources."""
            return [
                Resource(
                    uri=GRAMMAR_URI,  # type: ignore[arg-type]
                    name="Seri Grammar",
                    description="Summary of the Seri schedule language with an example",
                    mimeType="text/plain",
                ),
            ]

        @self.server.read_resource()  # type: ignore[arg-type]
        async def handle_read_resource(uri: Any) -> str:  # type: ignore[misc]
            """Read resource content."""
            return self.read_resource(str(uri))

    def _setup_handlers(self) -> None:
        """Setup additional MCP handlers."""

        @self.server.set_logging_level()
        async def handle_set_logging_level(level: LoggingLevel) -> None:  # type: ignore[misc]
            """Handle logging level changes."""
            self.logger.info("Logging level changed", level=level)

    # Public API methods for MCP protocol testing
    async def get_tools(self) -> List[Tool]:
        """Get list of available MCP tools (public API)."""
        return await self._list_tools_handler()

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """
        Call a specific MCP tool (public API).

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            A single JSON text content item
        """
        self.logger.info("Tool called", tool=name)
        try:
            if name == "compile_schedule":
                return self._handle_compile_schedule(arguments)
            elif name == "validate_schedule":
                return self._handle_validate_schedule(arguments)
            else:
                raise ValueError(f"Unknown tool: {name}")
        except ValueError as e:
            self.logger.warning("Tool call rejected", tool=name, error=str(e))
            return _text({"success": False, "error": str(e)})

    def read_resource(self, uri: str) -> str:
        """Read resource content (public API)."""
        if uri == GRAMMAR_URI:
            return read_grammar()
        raise ValueError(f"Unknown resource URI: {uri}")

    def _source_argument(self, arguments: Dict[str, Any]) -> str:
        source = arguments.get("source")
        if not isinstance(source, str):
            raise ValueError("source is required and must be a string")
        if len(source.encode("utf-8")) > self.settings.max_source_bytes:
            raise ValueError(
                f"source exceeds the limit of {self.settings.max_source_bytes} bytes"
            )
        return source

    def _handle_compile_schedule(self, arguments: Dict[str, Any]) -> List[TextContent]:
        """Handle compile_schedule tool execution."""
        source = self._source_argument(arguments)
        output_format = arguments.get("output_format")
        if output_format is not None and output_format not in {f.value for f in OutputFormat}:
            raise ValueError(f"Unsupported output format: {output_format}")

        options = build_options(
            output_format=output_format,
            strict=bool(arguments.get("strict", False)),
            sort_sessions=bool(arguments.get("sort_sessions", False)),
            template=arguments.get("template") or None,
            standalone=bool(arguments.get("standalone", False)),
        )
        result = compile_source(source, options)
        return _text(result.model_dump(mode="json"))

    def _handle_validate_schedule(self, arguments: Dict[str, Any]) -> List[TextContent]:
        """Handle validate_schedule tool execution."""
        source = self._source_argument(arguments)
        options = build_options(
            strict=bool(arguments.get("strict", False)),
            sort_sessions=bool(arguments.get("sort_sessions", False)),
            standalone=False,
        )
        try:
            schedule = check_schedule(source, options)
        except SeriError as e:
            response = ValidationResponse(valid=False, diagnostic=e.to_diagnostic())
        else:
            response = ValidationResponse(
                valid=True, day_count=len(schedule.days), session_count=schedule.session_count
            )
        return _text(response.model_dump(mode="json"))

    async def run(self) -> None:
        """Run the MCP server over stdio."""
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            self.logger.info("MCP server starting with stdio transport")
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="seri",
                    server_version=self.settings.app_version,
                    capabilities=ServerCapabilities(),
                ),
            )


async def main() -> None:
    """Main entry point for MCP server."""
    await SeriMCPServer().run()


def run() -> None:
    """Console script entry point."""
    setup_logging(driver_loggers=("mcp",))
    asyncio.run(main())


if __name__ == "__main__":
    run()
