"""TripGo MCP server project.

The import package lives in mcp_tools_tripgo/; run_mcp_server.py starts it.
"""
