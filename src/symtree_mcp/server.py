"""MCP server for symtree-mcp."""

import asyncio
import json
import os

from mcp.server import Server
from mcp.types import Tool, TextContent

from .tools.analyze_binary import analyze_binary
from .tools.list_binaries import list_binaries
from .tools.get_package_tree import get_package_tree
from .tools.get_package_symbols import get_package_symbols
from .tools.search_symbols import search_symbols


# Create server
server = Server("symtree-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [
        Tool(
            name="analyze_binary",
            description="Analyze a Go binary's symbol table. Runs `go tool nm -size`, groups symbols by package path, aggregates sizes into a tree, and saves it to local storage.",
            inputSchema={
                "type": "object",
                "properties": {
                    "binary": {
                        "type": "string",
                        "description": "Path to the binary to analyze"
                    },
                    "skip_symbols": {
                        "type": "boolean",
                        "description": "Keep only package sizes and drop per-symbol listings",
                        "default": False
                    }
                },
                "required": ["binary"]
            }
        ),
        Tool(
            name="list_binaries",
            description="List all analyzed binaries.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_package_tree",
            description="Get the package size tree of an analyzed binary, optionally starting at a package path.",
            inputSchema={
                "type": "object",
                "properties": {
                    "binary": {
                        "type": "string",
                        "description": "Binary path, index ID or binary name"
                    },
                    "package": {
                        "type": "string",
                        "description": "Optional package path to start from (e.g., 'github.com/org/repo')",
                        "default": ""
                    },
                    "order": {
                        "type": "string",
                        "description": "Order packages by name or by accumulated size",
                        "enum": ["name", "size"],
                        "default": "name"
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Maximum number of package levels to include"
                    }
                },
                "required": ["binary"]
            }
        ),
        Tool(
            name="get_package_symbols",
            description="Get the symbols attached to one package with their sizes and types.",
            inputSchema={
                "type": "object",
                "properties": {
                    "binary": {
                        "type": "string",
                        "description": "Binary path, index ID or binary name"
                    },
                    "package": {
                        "type": "string",
                        "description": "Package path (e.g., 'net/http' or 'fmt')"
                    },
                    "order": {
                        "type": "string",
                        "description": "Order symbols by name or by size",
                        "enum": ["name", "size"],
                        "default": "size"
                    }
                },
                "required": ["binary", "package"]
            }
        ),
        Tool(
            name="search_symbols",
            description="Search for symbols by name across an analyzed binary. Returns matches with package, type and size.",
            inputSchema={
                "type": "object",
                "properties": {
                    "binary": {
                        "type": "string",
                        "description": "Binary path, index ID or binary name"
                    },
                    "query": {
                        "type": "string",
                        "description": "Search query (matches symbol names and package paths)"
                    },
                    "kind": {
                        "type": "string",
                        "description": "Optional filter by symbol type code (e.g., 'T' for text, 'D' for data)"
                    },
                    "package_prefix": {
                        "type": "string",
                        "description": "Optional package path prefix to restrict the search"
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return",
                        "default": 10
                    }
                },
                "required": ["binary", "query"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    storage_path = os.environ.get("SYMTREE_INDEX_PATH")

    try:
        if name == "analyze_binary":
            result = analyze_binary(
                binary=arguments["binary"],
                skip_symbols=arguments.get("skip_symbols", False),
                storage_path=storage_path,
                go_command=os.environ.get("SYMTREE_GO")
            )
        elif name == "list_binaries":
            result = list_binaries(storage_path=storage_path)
        elif name == "get_package_tree":
            result = get_package_tree(
                binary=arguments["binary"],
                package=arguments.get("package", ""),
                order=arguments.get("order", "name"),
                max_depth=arguments.get("max_depth"),
                storage_path=storage_path
            )
        elif name == "get_package_symbols":
            result = get_package_symbols(
                binary=arguments["binary"],
                package=arguments["package"],
                order=arguments.get("order", "size"),
                storage_path=storage_path
            )
        elif name == "search_symbols":
            result = search_symbols(
                binary=arguments["binary"],
                query=arguments["query"],
                kind=arguments.get("kind"),
                package_prefix=arguments.get("package_prefix"),
                max_results=arguments.get("max_results", 10),
                storage_path=storage_path
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
