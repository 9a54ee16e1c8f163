"""
Configuration constants for the Emailnator client.

This module contains the service endpoints, request header contract,
transport settings and environment overrides.
"""

import os
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables from .env file
# Check for .env in current directory first
env_path = Path.cwd() / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

# ==============================================================================
# Service Endpoints
# ==============================================================================

BASE_URL: str = "https://www.emailnator.com"

# Visited once per session, only to harvest the XSRF cookie
HOMEPAGE_URL: str = f"{BASE_URL}/"

GENERATE_EMAIL_URL: str = f"{BASE_URL}/generate-email"

# Serves both the inbox listing and single message bodies
INBOX_URL: str = f"{BASE_URL}/message-list"

# ==============================================================================
# Header Contract
# ==============================================================================

X_XSRF_TOKEN: str = "X-XSRF-TOKEN"

APPLICATION_JSON: str = "application/json"

XSRF_COOKIE_PREFIX: str = "XSRF-TOKEN="

XSRF_COOKIE_SEPARATOR: str = ";"

USER_AGENT: str = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:141.0) Gecko/20100101 Firefox/141.0"
)

# ==============================================================================
# Transport Settings
# ==============================================================================

# Automatic redirect hops allowed per request
MAX_REDIRECTS: int = 2

# TCP keepalive idle time and probe interval (in seconds)
TCP_KEEPALIVE: int = 80

# Connect + read timeout per request (in seconds)
REQUEST_TIMEOUT: int = int(os.getenv("EMAILNATOR_TIMEOUT", 30))

# Tor SOCKS proxy port (9150 for Tor Browser, 9050 for system Tor)
TOR_PORT: int = int(os.getenv("TOR_PORT", 9150))

# ==============================================================================
# Output Settings
# ==============================================================================

# Print progress lines through utils.logger
VERBOSE: bool = os.getenv("EMAILNATOR_VERBOSE", "1").lower() not in ("0", "false", "no")
