"""
Centralized HTTP headers configuration for Sports MCP.

stats.nba.com rejects requests that do not look like they come from the
nba.com site, so the stats headers carry a browser-compatible User-Agent
plus Referer/Origin. The MLB and ESPN endpoints only need a User-Agent and
a JSON Accept header.

Usage:
    from sports_mcp.api.headers import get_stats_api_headers, get_default_headers
"""

import os
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, Optional

# ============================================================================
# Version Detection
# ============================================================================


def _get_package_version() -> str:
    """
    Get the installed version of the sports-mcp package.

    Returns:
        Version string (e.g., "0.3.0") or "dev" if not installed
    """
    try:
        return version("sports-mcp")
    except PackageNotFoundError:
        return "dev"


# ============================================================================
# Header Constants
# ============================================================================


SPORTS_MCP_VERSION = _get_package_version()

# Custom User-Agent identifying Sports MCP (MLB + ESPN requests)
SPORTS_USER_AGENT = os.getenv(
    "SPORTS_MCP_USER_AGENT",
    f"Sports-MCP/{SPORTS_MCP_VERSION}",
)

# stats.nba.com only answers browser-looking clients
NBA_USER_AGENT = os.getenv(
    "SPORTS_MCP_NBA_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
)
NBA_REFERER = os.getenv("SPORTS_MCP_NBA_REFERER", "https://www.nba.com/")
NBA_ORIGIN = os.getenv("SPORTS_MCP_NBA_ORIGIN", "https://www.nba.com")

ACCEPT_JSON = "application/json"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"


# ============================================================================
# Header Builder Functions
# ============================================================================


def get_default_headers(
    user_agent: Optional[str] = None,
    additional_headers: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """
    Headers for the MLB Stats API and the ESPN APIs.

    Args:
        user_agent: Override for the User-Agent header
        additional_headers: Optional dict of additional headers to merge

    Returns:
        Dictionary of HTTP headers
    """
    headers = {
        "User-Agent": user_agent or SPORTS_USER_AGENT,
        "Accept": ACCEPT_JSON,
    }
    if additional_headers:
        headers.update(additional_headers)
    return headers


def get_stats_api_headers() -> Dict[str, str]:
    """
    Get headers for the NBA Stats API (stats.nba.com).

    Stats API endpoints are strict:
    - a browser User-Agent is required
    - Referer and Origin must point at nba.com

    Returns:
        Dictionary of HTTP headers for stats API endpoints
    """
    return {
        "User-Agent": NBA_USER_AGENT,
        "Accept": ACCEPT_JSON,
        "Accept-Language": ACCEPT_LANGUAGE,
        "Referer": NBA_REFERER,
        "Origin": NBA_ORIGIN,
    }
