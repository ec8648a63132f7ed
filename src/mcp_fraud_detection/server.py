import logging
from typing import Any, Literal

from fastmcp.server import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from .datasets import list_scenarios
from .models import A2UIResponse, GraphEdge, GraphNode
from .service import FraudDetectionService
from .utils import format_namespace

logger = logging.getLogger("mcp_fraud_detection")
logger.setLevel(logging.INFO)


def create_mcp_server(
    service: FraudDetectionService | None = None, namespace: str = ""
) -> FastMCP:
    """Create an MCP server instance exposing the fraud detection actions."""

    if service is None:
        service = FraudDetectionService()

    namespace_prefix = format_namespace(namespace)
    mcp: FastMCP = FastMCP(
        "mcp-fraud-detection",
        instructions="Detects fraud and returns a knowledge graph visualization",
    )

    @mcp.resource("resource://schema/a2ui_response")
    def a2ui_response_schema() -> dict[str, Any]:
        """Get the schema for a knowledge graph rendering response."""
        logger.info("Getting the schema for a rendering response.")
        return A2UIResponse.model_json_schema()

    @mcp.resource("resource://schema/graph_node")
    def graph_node_schema() -> dict[str, Any]:
        """Get the schema for a graph node record."""
        logger.info("Getting the schema for a graph node.")
        return GraphNode.model_json_schema()

    @mcp.resource("resource://schema/graph_edge")
    def graph_edge_schema() -> dict[str, Any]:
        """Get the schema for a graph edge record."""
        logger.info("Getting the schema for a graph edge.")
        return GraphEdge.model_json_schema()

    @mcp.tool(
        name=namespace_prefix + "showTransaction",
        annotations=ToolAnnotations(
            title="Show Transactions",
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=False,
        ),
    )
    def show_transaction(
        username: str = Field(
            ..., description="The user whose transactions to show.", min_length=1
        ),
    ) -> dict[str, Any]:
        """Show transactions for a user in a knowledge graph.

        Opens a new rendering surface for the user and returns the merged
        `surfaceUpdate`, `dataModelUpdate` and `beginRendering` messages.
        """
        logger.info(f"MCP tool: showTransaction ({username})")
        return service.show_transaction(username).to_a2ui()

    @mcp.tool(
        name=namespace_prefix + "showSuspected",
        annotations=ToolAnnotations(
            title="Show Suspected Fraud",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
    )
    def show_suspected(
        username: str = Field(
            ..., description="The user to show the fraud alert for.", min_length=1
        ),
    ) -> dict[str, Any]:
        """Show suspected fraud alert for a user.

        Redraws the surface opened by `showTransaction` with the flagged accounts
        and transfers. If `showTransaction` has not been called for the user,
        returns an object with a single `error` key instead.
        """
        logger.info(f"MCP tool: showSuspected ({username})")
        return service.show_suspected(username).to_a2ui()

    @mcp.tool(
        name=namespace_prefix + "list_fraud_scenarios",
        annotations=ToolAnnotations(
            title="List Fraud Scenarios",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
    )
    def list_fraud_scenarios() -> dict[str, Any]:
        """List the simulated fraud networks by username. Any username not listed gets the `*` network."""
        logger.info("Listing available fraud scenarios.")
        scenarios = list_scenarios()
        return {
            "available_scenarios": scenarios,
            "total_scenarios": len(scenarios),
            "usage": "Call showTransaction with a username, then showSuspected with the same username",
        }

    return mcp


async def main(
    transport: Literal["stdio", "sse", "http"] = "stdio",
    namespace: str = "",
    host: str = "127.0.0.1",
    port: int = 8000,
    path: str = "/mcp/",
    allow_origins: list[str] = [],
    allowed_hosts: list[str] = [],
) -> None:
    logger.info("Starting MCP Fraud Detection Server")

    custom_middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        ),
        Middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts),
    ]

    mcp = create_mcp_server(namespace=namespace)

    match transport:
        case "http":
            logger.info(
                f"Running Fraud Detection MCP Server with HTTP transport on {host}:{port}..."
            )
            await mcp.run_http_async(
                host=host,
                port=port,
                path=path,
                middleware=custom_middleware,
                stateless_http=True,
            )
        case "stdio":
            logger.info("Running Fraud Detection MCP Server with stdio transport...")
            await mcp.run_stdio_async()
        case "sse":
            logger.info(
                f"Running Fraud Detection MCP Server with SSE transport on {host}:{port}..."
            )
            await mcp.run_http_async(
                host=host,
                port=port,
                path=path,
                middleware=custom_middleware,
                transport="sse",
                stateless_http=True,
            )
