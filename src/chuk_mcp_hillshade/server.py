#!/usr/bin/env python3
"""
Hillshade MCP Server - Entry Point

This module provides the async MCP server for relief shading of terrain
height fields. Supports both stdio (for Claude Desktop) and HTTP (for API
access) transports.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .constants import EnvVar, SessionProvider, StorageProvider

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

logger = logging.getLogger(__name__)


def _resolve_provider() -> tuple[str, str | None]:
    """
    Pick the storage provider and bucket from environment variables.

    Returns:
        (provider, bucket) where provider falls back to memory if its
        settings are incomplete, or ("", None) if S3 lacks credentials
    """
    provider = os.environ.get(EnvVar.ARTIFACTS_PROVIDER, StorageProvider.MEMORY)

    if provider == StorageProvider.S3:
        bucket = os.environ.get(EnvVar.BUCKET_NAME)
        aws_key = os.environ.get(EnvVar.AWS_ACCESS_KEY_ID)
        aws_secret = os.environ.get(EnvVar.AWS_SECRET_ACCESS_KEY)
        if not all([bucket, aws_key, aws_secret]):
            logger.warning(
                "S3 provider configured but missing credentials. "
                f"Set {EnvVar.AWS_ACCESS_KEY_ID}, {EnvVar.AWS_SECRET_ACCESS_KEY}, "
                f"and {EnvVar.BUCKET_NAME}."
            )
            return "", None
        logger.info(f"Using S3 artifact storage (bucket: {bucket})")
        logger.info(f"  Endpoint: {os.environ.get(EnvVar.AWS_ENDPOINT_URL_S3)}")
        return provider, bucket

    if provider == StorageProvider.FILESYSTEM:
        artifacts_path = os.environ.get(EnvVar.ARTIFACTS_PATH)
        if not artifacts_path:
            logger.warning(
                f"Filesystem provider configured but {EnvVar.ARTIFACTS_PATH} not set. "
                "Defaulting to memory provider."
            )
            return StorageProvider.MEMORY, None
        Path(artifacts_path).mkdir(parents=True, exist_ok=True)
        logger.info(f"Using filesystem artifact storage (path: {artifacts_path})")
        return provider, artifacts_path

    return provider, None


def _init_artifact_store() -> bool:
    """
    Initialize the artifact store from environment variables.

    Returns:
        True if artifact store was initialized, False otherwise
    """
    provider, bucket = _resolve_provider()
    if not provider:
        return False

    redis_url = os.environ.get(EnvVar.REDIS_URL)

    try:
        from chuk_artifacts import ArtifactStore
        from chuk_mcp_server import set_global_artifact_store

        store_kwargs: dict[str, Any] = {
            "storage_provider": provider,
            "session_provider": SessionProvider.REDIS if redis_url else SessionProvider.MEMORY,
        }
        if bucket:
            store_kwargs["bucket"] = bucket

        set_global_artifact_store(ArtifactStore(**store_kwargs))

        logger.info(f"Artifact store initialized successfully (provider: {provider})")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize artifact store: {e}")
        return False


# Import mcp instance and all registered tools from async server
from .async_server import mcp  # noqa: F401, E402


def _run_http(host: str, port: int) -> None:
    print(f"Hillshade MCP Server starting in HTTP mode on {host}:{port}", file=sys.stderr)
    mcp.run(host=host, port=port, stdio=False)


def _run_stdio(note: str = "") -> None:
    print(f"Hillshade MCP Server starting in STDIO mode{note}", file=sys.stderr)
    mcp.run(stdio=True)


def main() -> None:
    """Main entry point for the MCP server."""
    import argparse

    # Initialize artifact store at startup, not at import time
    _init_artifact_store()

    parser = argparse.ArgumentParser(description="Hillshade MCP Server")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["stdio", "http"],
        default=None,
        help="Transport mode (stdio for Claude Desktop, http for API)",
    )
    parser.add_argument(
        "--host", default="localhost", help="Host for HTTP mode (default: localhost)"
    )
    parser.add_argument("--port", type=int, default=8004, help="Port for HTTP mode (default: 8004)")

    args = parser.parse_args()

    if args.mode == "stdio":
        _run_stdio()
    elif args.mode == "http":
        _run_http(args.host, args.port)
    elif os.environ.get(EnvVar.MCP_STDIO) or (not sys.stdin.isatty()):
        _run_stdio(" (auto-detected)")
    else:
        _run_http(args.host, args.port)


if __name__ == "__main__":
    main()
