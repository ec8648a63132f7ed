import argparse
import os

import pytest
from fastmcp.server import FastMCP

from mcp_fraud_detection.server import create_mcp_server
from mcp_fraud_detection.service import FraudDetectionService
from mcp_fraud_detection.surface_registry import SurfaceRegistry


@pytest.fixture
def clean_env():
    """Fixture to clean environment variables before each test."""
    env_vars = [
        "FRAUD_MCP_TRANSPORT",
        "FRAUD_MCP_SERVER_HOST",
        "FRAUD_MCP_SERVER_PORT",
        "FRAUD_MCP_SERVER_PATH",
        "FRAUD_MCP_SERVER_ALLOW_ORIGINS",
        "FRAUD_MCP_SERVER_ALLOWED_HOSTS",
        "FRAUD_MCP_NAMESPACE",
    ]
    # Store original values
    original_values = {}
    for var in env_vars:
        if var in os.environ:
            original_values[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars:
        os.environ.pop(var, None)
    # Restore original values
    for var, value in original_values.items():
        os.environ[var] = value


@pytest.fixture
def args_factory():
    """Factory fixture to create argparse.Namespace objects with default None values."""

    def _create_args(**kwargs):
        defaults = {
            "transport": None,
            "server_host": None,
            "server_port": None,
            "server_path": None,
            "allow_origins": None,
            "allowed_hosts": None,
            "namespace": None,
        }
        defaults.update(kwargs)
        return argparse.Namespace(**defaults)

    return _create_args


@pytest.fixture
def registry() -> SurfaceRegistry:
    """A fresh, empty surface registry."""
    return SurfaceRegistry()


@pytest.fixture
def service(registry: SurfaceRegistry) -> FraudDetectionService:
    """A service backed by an isolated registry."""
    return FraudDetectionService(registry=registry)


@pytest.fixture
def test_mcp_server(service: FraudDetectionService) -> FastMCP:
    """Create an MCP server instance for testing."""
    return create_mcp_server(service)
