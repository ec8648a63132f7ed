import argparse
import logging
import os
from typing import Literal, Union

logger = logging.getLogger(__name__)

ALLOWED_TRANSPORTS = ["stdio", "http", "sse"]


def format_namespace(namespace: str) -> str:
    """
    Format the namespace to ensure it ends with a hyphen.

    Parameters
    ----------
    namespace : str
        The namespace to format.

    Returns
    -------
    formatted_namespace : str
        The namespace in format: namespace-toolname
    """
    if namespace:
        if namespace.endswith("-"):
            return namespace
        else:
            return namespace + "-"
    else:
        return ""


def parse_transport(args: argparse.Namespace) -> Literal["stdio", "http", "sse"]:
    """
    Parse the transport from the command line arguments or environment variables.

    Parameters
    ----------
    args : argparse.Namespace
        The command line arguments.

    Returns
    -------
    transport : str
    The transport.

    Raises
    ------
    ValueError: If the provided transport is invalid.
    """
    if args.transport is not None:
        transport = args.transport
    elif os.getenv("FRAUD_MCP_TRANSPORT") is not None:
        transport = os.getenv("FRAUD_MCP_TRANSPORT")
    else:
        logger.info("Info: No transport type provided. Using default: stdio")
        return "stdio"

    if transport not in ALLOWED_TRANSPORTS:
        logger.error(
            f"Invalid transport: {transport}. Allowed transports are: {ALLOWED_TRANSPORTS}"
        )
        raise ValueError(
            f"Invalid transport: {transport}. Allowed transports are: {ALLOWED_TRANSPORTS}"
        )
    return transport


def _parse_http_setting(
    cli_value,
    env_var: str,
    arg_name: str,
    default,
    transport: Literal["stdio", "http", "sse"],
):
    "Resolve a setting that only applies to the HTTP transports: CLI, then env, then default."
    if cli_value is not None:
        if transport == "stdio":
            logger.warning(
                f"Warning: Server {arg_name} provided, but transport is `stdio`. The `server_{arg_name}` argument will be set, but ignored."
            )
        return cli_value

    env_value = os.getenv(env_var)
    if env_value is not None:
        if transport == "stdio":
            logger.warning(
                f"Warning: Server {arg_name} provided, but transport is `stdio`. The `{env_var}` environment variable will be set, but ignored."
            )
        return env_value

    if transport != "stdio":
        logger.warning(
            f"Warning: No server {arg_name} provided and transport is not `stdio`. Using default server {arg_name}: {default}"
        )
        return default

    logger.info(
        f"Info: No server {arg_name} provided and transport is `stdio`. `server_{arg_name}` will be None."
    )
    return None


def parse_server_host(
    args: argparse.Namespace, transport: Literal["stdio", "http", "sse"]
) -> str | None:
    """
    Parse the server host from the command line arguments or environment variables.

    Returns None when the transport is `stdio` and nothing was provided.
    """
    return _parse_http_setting(
        args.server_host, "FRAUD_MCP_SERVER_HOST", "host", "127.0.0.1", transport
    )


def parse_server_port(
    args: argparse.Namespace, transport: Literal["stdio", "http", "sse"]
) -> int | None:
    """
    Parse the server port from the command line arguments or environment variables.

    Returns None when the transport is `stdio` and nothing was provided.
    """
    port = _parse_http_setting(
        args.server_port, "FRAUD_MCP_SERVER_PORT", "port", 8000, transport
    )
    return int(port) if port is not None else None


def parse_server_path(
    args: argparse.Namespace, transport: Literal["stdio", "http", "sse"]
) -> str | None:
    """
    Parse the server path from the command line arguments or environment variables.

    Returns None when the transport is `stdio` and nothing was provided.
    """
    return _parse_http_setting(
        args.server_path, "FRAUD_MCP_SERVER_PATH", "path", "/mcp/", transport
    )


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_allow_origins(args: argparse.Namespace) -> list[str]:
    """
    Parse the CORS allow origins from the command line arguments or environment variables.

    Parameters
    ----------
    args : argparse.Namespace
        The command line arguments.

    Returns
    -------
    allow_origins : list[str]
    The allow origins.
    """
    if args.allow_origins is not None:
        return _split_csv(args.allow_origins)
    elif os.getenv("FRAUD_MCP_SERVER_ALLOW_ORIGINS") is not None:
        return _split_csv(os.getenv("FRAUD_MCP_SERVER_ALLOW_ORIGINS", ""))
    else:
        logger.info("Info: No allow origins provided. Defaulting to no allowed origins.")
        return list()


def parse_allowed_hosts(args: argparse.Namespace) -> list[str]:
    """
    Parse the allowed hosts from the command line arguments or environment variables.

    Parameters
    ----------
    args : argparse.Namespace
        The command line arguments.

    Returns
    -------
    allowed_hosts : list[str]
    The allowed hosts.
    """
    if args.allowed_hosts is not None:
        return _split_csv(args.allowed_hosts)
    elif os.getenv("FRAUD_MCP_SERVER_ALLOWED_HOSTS") is not None:
        return _split_csv(os.getenv("FRAUD_MCP_SERVER_ALLOWED_HOSTS", ""))
    else:
        logger.info(
            "Info: No allowed hosts provided. Defaulting to secure mode - only localhost and 127.0.0.1 allowed."
        )
        return ["localhost", "127.0.0.1"]


def parse_namespace(args: argparse.Namespace) -> str:
    """
    Parse the tool namespace from the command line arguments or environment variables.
    """
    if args.namespace is not None:
        logger.info(f"Info: Namespace provided for tools: {args.namespace}")
        return args.namespace
    elif os.getenv("FRAUD_MCP_NAMESPACE") is not None:
        logger.info(f"Info: Namespace provided for tools: {os.getenv('FRAUD_MCP_NAMESPACE')}")
        return os.getenv("FRAUD_MCP_NAMESPACE")
    else:
        logger.info("Info: No namespace provided for tools. No namespace will be used.")
        return ""


def process_config(args: argparse.Namespace) -> dict[str, Union[str, int, list[str], None]]:
    """
    Process the command line arguments and environment variables to create a config dictionary.
    This may then be used as input to the main server function.
    If any value is not provided, then a warning is logged and a default value is used, if appropriate.

    Parameters
    ----------
    args : argparse.Namespace
        The command line arguments.

    Returns
    -------
    config : dict[str, Any]
        The configuration dictionary.
    """

    config = dict()

    # server configuration
    config["transport"] = parse_transport(args)
    config["host"] = parse_server_host(args, config["transport"])
    config["port"] = parse_server_port(args, config["transport"])
    config["path"] = parse_server_path(args, config["transport"])

    # namespace configuration
    config["namespace"] = parse_namespace(args)

    # middleware configuration
    config["allow_origins"] = parse_allow_origins(args)
    config["allowed_hosts"] = parse_allowed_hosts(args)

    return config
