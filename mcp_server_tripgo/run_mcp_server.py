"""Entrypoint for running the TripGo MCP server.

Usage:
  python run_mcp_server.py [--transport streamable-http|sse|stdio] [--host H] [--port P]

Or via MCP host config (e.g., Claude Desktop) pointing to this script with --transport stdio.
"""
from mcp_tools_tripgo.mcp.server import main

if __name__ == "__main__":
    main()
