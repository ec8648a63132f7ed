import asyncio
import subprocess
import sys

import pytest
import pytest_asyncio

HTTP_PORT = 8011


async def _start_server(*args: str) -> asyncio.subprocess.Process:
    """Start the server in a child process with the current interpreter.

    The child imports `mcp_fraud_detection` from the environment, so the package
    must be installed (`pip install -e .[test]`). The pytest `pythonpath` setting
    does not reach child processes.
    """
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-c",
        "from mcp_fraud_detection import main; main()",
        *args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    await asyncio.sleep(3)

    if process.returncode is not None:
        stdout, stderr = await process.communicate()
        raise RuntimeError(
            f"Server failed to start. stdout: {stdout.decode()}, stderr: {stderr.decode()}"
        )
    return process


async def _stop_server(process: asyncio.subprocess.Process) -> None:
    try:
        process.terminate()
        await asyncio.wait_for(process.wait(), timeout=5.0)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()


@pytest_asyncio.fixture
async def http_server():
    """Start the MCP server in HTTP mode. Requires the package to be installed."""
    process = await _start_server(
        "--transport",
        "http",
        "--server-host",
        "127.0.0.1",
        "--server-port",
        str(HTTP_PORT),
    )

    yield process

    await _stop_server(process)


@pytest.fixture
def http_url(http_server) -> str:
    """URL of the MCP endpoint served by `http_server`."""
    return f"http://127.0.0.1:{HTTP_PORT}/mcp/"
