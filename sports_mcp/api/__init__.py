"""Upstream API clients, errors and response models for Sports MCP."""
