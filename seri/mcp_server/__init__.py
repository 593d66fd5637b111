"""
MCP Server Implementation
=========================

Model Context Protocol server exposing the Seri compiler to MCP clients.

Tools provided:
- compile_schedule: Compile a Seri document to TikZ or HTML
- validate_schedule: Validate a Seri document without rendering it
"""
