"""
Configuration for the Sports MCP server and its upstream API clients.

Values come from environment variables (a .env file is loaded by the
server entry point before these models are built).
"""

import os
from typing import Literal

from pydantic import BaseModel, Field

from sports_mcp.api.headers import SPORTS_USER_AGENT


class ClientConfig(BaseModel):
    """Configuration shared by the MLB, NBA and NFL API clients."""

    mlb_base_url: str = Field(
        default="https://statsapi.mlb.com/api/v1", description="MLB Stats API root"
    )
    nfl_site_base_url: str = Field(
        default="https://site.api.espn.com/apis/site/v2/sports/football/nfl",
        description="ESPN site API root (teams, rosters)",
    )
    nfl_core_base_url: str = Field(
        default="https://sports.core.api.espn.com/v2/sports/football/leagues/nfl",
        description="ESPN core API root (athlete statistics)",
    )
    http_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    roster_cache_ttl: int = Field(
        default=86400, ge=0, description="Seconds to keep roster/player lookups"
    )
    user_agent: str = Field(default=SPORTS_USER_AGENT)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            SPORTS_MCP_MLB_BASE_URL: MLB Stats API root
            SPORTS_MCP_NFL_SITE_BASE_URL: ESPN site API root
            SPORTS_MCP_NFL_CORE_BASE_URL: ESPN core API root
            SPORTS_MCP_HTTP_TIMEOUT: request timeout in seconds (default: 30)
            SPORTS_MCP_ROSTER_CACHE_TTL: roster cache TTL in seconds (default: 86400)
            SPORTS_MCP_USER_AGENT: User-Agent sent upstream
        """
        defaults = cls()
        return cls(
            mlb_base_url=os.getenv("SPORTS_MCP_MLB_BASE_URL", defaults.mlb_base_url),
            nfl_site_base_url=os.getenv(
                "SPORTS_MCP_NFL_SITE_BASE_URL", defaults.nfl_site_base_url
            ),
            nfl_core_base_url=os.getenv(
                "SPORTS_MCP_NFL_CORE_BASE_URL", defaults.nfl_core_base_url
            ),
            http_timeout=float(
                os.getenv("SPORTS_MCP_HTTP_TIMEOUT", str(defaults.http_timeout))
            ),
            roster_cache_ttl=int(
                os.getenv("SPORTS_MCP_ROSTER_CACHE_TTL", str(defaults.roster_cache_ttl))
            ),
            user_agent=os.getenv("SPORTS_MCP_USER_AGENT", defaults.user_agent),
        )


class ServerConfig(BaseModel):
    """Configuration for the MCP server process."""

    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = Field(default=8006, ge=1, le=65535)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            MCP_TRANSPORT: stdio, sse or streamable-http (default: stdio)
            MCP_HOST: bind host for network transports (default: 127.0.0.1)
            SPORTS_MCP_PORT: bind port for network transports (default: 8006)
            SPORTS_MCP_LOG_LEVEL: logging level (default: INFO)
        """
        return cls(
            transport=os.getenv("MCP_TRANSPORT", "stdio"),
            host=os.getenv("MCP_HOST", "127.0.0.1"),
            port=int(os.getenv("SPORTS_MCP_PORT", "8006")),
            log_level=os.getenv("SPORTS_MCP_LOG_LEVEL", "INFO").upper(),
        )
