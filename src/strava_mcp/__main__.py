"""
Command line entry point: python -m strava_mcp, or the strava-mcp script.

Serves the Strava tools over stdio by default. With --http it serves
streamable HTTP at /mcp, where each MCP session carries its own Strava
access token.

    python -m strava_mcp
    python -m strava_mcp --http --port 9000 --session-dir ./sessions
"""

import argparse
import os
from pathlib import Path

from strava_mcp import client_factory, create_app


def main():
    parser = argparse.ArgumentParser(
        prog="strava-mcp",
        description="Serve typed, cached Strava v3 API tools (athletes, segments, "
                    "efforts, activities) to MCP clients.",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Serve streamable HTTP at /mcp instead of stdio (one Strava token per MCP session)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface for the HTTP server (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8081,
        help="Port for the HTTP server (default: 8081)"
    )
    parser.add_argument(
        "--session-dir",
        type=Path,
        help="Where session token files are kept (default: $STRAVA_SESSION_DIR or /data/strava_sessions)"
    )
    parser.add_argument(
        "--max-live-tokens",
        type=int,
        help="Access tokens whose caches stay in memory at once "
             "(default: $STRAVA_MAX_LIVE_TOKENS or 256)"
    )

    args = parser.parse_args()

    if args.session_dir is not None:
        client_factory.SESSION_STORE_DIR = args.session_dir
    if args.max_live_tokens is not None:
        if args.max_live_tokens < 1:
            parser.error("--max-live-tokens must be at least 1")
        client_factory.MAX_LIVE_TOKENS = args.max_live_tokens

    if args.http:
        os.environ["MCP_TRANSPORT"] = "http"
        os.environ["MCP_HOST"] = args.host
        os.environ["MCP_PORT"] = str(args.port)
    else:
        os.environ["MCP_TRANSPORT"] = "stdio"

    app = create_app()

    if args.http:
        print(f"Strava tools listening on http://{args.host}:{args.port}/mcp")
        app.run(transport="http", host=args.host, port=args.port)
    else:
        app.run()


if __name__ == "__main__":
    main()
