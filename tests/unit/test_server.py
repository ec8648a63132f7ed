import pytest
from fastmcp.server import FastMCP

from mcp_fraud_detection.server import create_mcp_server
from mcp_fraud_detection.service import FraudDetectionService
from mcp_fraud_detection.utils import format_namespace


class TestFormatNamespace:
    """Test the format_namespace function behavior."""

    def test_format_namespace_empty_string(self):
        assert format_namespace("") == ""

    def test_format_namespace_no_hyphen(self):
        assert format_namespace("myapp") == "myapp-"

    def test_format_namespace_with_hyphen(self):
        assert format_namespace("myapp-") == "myapp-"


class TestServerTools:
    """Test server tools functionality."""

    @pytest.mark.asyncio
    async def test_tools_registered(self, test_mcp_server: FastMCP):
        tools = await test_mcp_server.get_tools()
        for name in ["showTransaction", "showSuspected", "list_fraud_scenarios"]:
            assert name in tools.keys(), f"Tool {name} not found in tools"

    @pytest.mark.asyncio
    async def test_namespace_tool_prefixes(self, service: FraudDetectionService):
        namespaced_server = create_mcp_server(service, namespace="fraud")
        tools = await namespaced_server.get_tools()

        for name in [
            "fraud-showTransaction",
            "fraud-showSuspected",
            "fraud-list_fraud_scenarios",
        ]:
            assert name in tools.keys(), f"Tool {name} not found in tools"
        assert "showTransaction" not in tools.keys()

    @pytest.mark.asyncio
    async def test_show_transaction_then_suspected(self, test_mcp_server: FastMCP):
        tools = await test_mcp_server.get_tools()

        transaction = tools["showTransaction"].fn(username="bob")
        suspected = tools["showSuspected"].fn(username="bob")

        assert "error" not in suspected
        assert (
            suspected["surfaceUpdate"]["surfaceId"]
            == transaction["surfaceUpdate"]["surfaceId"]
        )
        assert len(transaction["dataModelUpdate"]["contents"][0]["valueArray"]) == 5
        assert len(suspected["dataModelUpdate"]["contents"][0]["valueArray"]) == 7

    @pytest.mark.asyncio
    async def test_show_suspected_without_transaction(self, test_mcp_server: FastMCP):
        tools = await test_mcp_server.get_tools()

        result = tools["showSuspected"].fn(username="carol")

        assert result == {
            "error": "No active transaction surface found for user: carol. Please call showTransaction first."
        }

    @pytest.mark.asyncio
    async def test_servers_share_injected_service(self, service: FraudDetectionService):
        first = await create_mcp_server(service).get_tools()
        second = await create_mcp_server(service).get_tools()

        transaction = first["showTransaction"].fn(username="vishal")
        suspected = second["showSuspected"].fn(username="vishal")

        assert (
            suspected["beginRendering"]["surfaceId"]
            == transaction["beginRendering"]["surfaceId"]
        )

    @pytest.mark.asyncio
    async def test_list_fraud_scenarios(self, test_mcp_server: FastMCP):
        tools = await test_mcp_server.get_tools()

        result = tools["list_fraud_scenarios"].fn()

        assert result["total_scenarios"] == 3
        assert set(result["available_scenarios"]) == {"bob", "vishal", "*"}
        assert "usage" in result

    @pytest.mark.asyncio
    async def test_tool_annotations(self, test_mcp_server: FastMCP):
        tools = await test_mcp_server.get_tools()

        assert tools["showTransaction"].annotations.readOnlyHint is False
        assert tools["showTransaction"].annotations.idempotentHint is False
        assert tools["showSuspected"].annotations.readOnlyHint is True
        assert tools["showSuspected"].annotations.idempotentHint is True

    @pytest.mark.asyncio
    async def test_show_transaction_replaces_surface(
        self, service: FraudDetectionService
    ):
        """Test that showTransaction writes a new surface over the previous one."""
        tools = await create_mcp_server(service).get_tools()
        show_transaction = tools["showTransaction"]

        first = show_transaction.fn(username="bob")["beginRendering"]["surfaceId"]
        second = show_transaction.fn(username="bob")["beginRendering"]["surfaceId"]

        assert first != second
        assert len(service.registry) == 1
        assert service.registry.lookup("bob") == second
        assert show_transaction.annotations.readOnlyHint is False


class TestMCPResources:
    """Test MCP resources functionality."""

    @pytest.mark.asyncio
    async def test_mcp_resources_schemas(self, test_mcp_server: FastMCP):
        resources = await test_mcp_server.get_resources()

        for resource_uri in [
            "resource://schema/a2ui_response",
            "resource://schema/graph_node",
            "resource://schema/graph_edge",
        ]:
            resource = resources.get(resource_uri)
            assert resource is not None
            result = resource.fn()
            assert isinstance(result, dict)
            assert "properties" in result

    @pytest.mark.asyncio
    async def test_a2ui_response_schema_fields(self, test_mcp_server: FastMCP):
        resources = await test_mcp_server.get_resources()

        result = resources["resource://schema/a2ui_response"].fn()

        assert set(result["properties"]) == {
            "surfaceUpdate",
            "dataModelUpdate",
            "beginRendering",
        }
