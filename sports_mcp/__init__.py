"""Sports MCP: multi-league player stats and comparison server (MLB, NBA, NFL)."""

from sports_mcp.api.client_registry import ClientRegistry
from sports_mcp.comparison import ComparisonRegistry, ComparisonService, NFLSelector

__all__ = [
    "ClientRegistry",
    "ComparisonRegistry",
    "ComparisonService",
    "NFLSelector",
]

__version__ = "0.1.0"
