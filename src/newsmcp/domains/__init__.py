"""Domain-Driven Design bounded contexts for newsmcp.

This package contains:
- Response Filter Context: field-group projection of upstream responses
- Toolset Context: category-based tool visibility for the MCP server
- Shared Kernel: parameter types shared by all tools
"""
