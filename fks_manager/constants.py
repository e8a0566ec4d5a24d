"""
FKS Service Manager Constants

Centralized constants for magic values, defaults, and configuration.
"""

from pathlib import Path

# Default SSH Configuration
DEFAULT_SSH_USER = "fks_user"

# SSH Timeout Configuration
SSH_PROBE_TIMEOUT = 10
SSH_RESOLVE_TIMEOUT = 5
SSH_HEALTH_TIMEOUT = 10
# Slack on top of ConnectTimeout before subprocess gives up
SUBPROCESS_GRACE_SECONDS = 5

# Remote Layout
DEFAULT_SERVICE_DIR = "/home/fks_user/fks"
REMOTE_SCRIPT_DIR = "/tmp"

# Public Domain
DEFAULT_DOMAIN = "7gram.xyz"

# Compose Manifests per Role
AUTH_COMPOSE_FILE = "docker-compose.auth.yml"
API_COMPOSE_FILE = "docker-compose.api.yml"
WEB_COMPOSE_FILE = "docker-compose.web.yml"

# Grace Periods (seconds) after `docker compose up -d`
AUTH_GRACE_SECONDS = 30
API_GRACE_SECONDS = 60
WEB_GRACE_SECONDS = 30
SINGLE_GRACE_SECONDS = 90

# Diagnostic curl timeout inside remote scripts
ENDPOINT_PROBE_TIMEOUT = 10

# Health Check Ports
MULTI_HEALTH_PORTS = {
    "auth": ("Auth", 9000),
    "api": ("API", 8000),
    "web": ("Web", 80),
}
SINGLE_HEALTH_PORTS = [
    ("API", 8000),
    ("Web", 3000),
    ("Auth", 9000),
]

# DNS Configuration
DNS_TOKEN_ENV = "CLOUDFLARE_API_TOKEN"
DNS_ZONE_ENV = "CLOUDFLARE_ZONE_ID"
DNS_UPDATER_ENV = "FKS_DNS_UPDATER"
DEFAULT_DNS_UPDATER = Path("scripts") / "dns" / "cloudflare-updater.sh"
DNS_SINGLE_SERVICE_NAME = "fks"
DNS_UPDATER_TIMEOUT = 120

# Mesh Network Client
MESH_CLIENT = "tailscale"

# Log Configuration
LOG_DIR_ENV = "FKS_LOG_DIR"
DEFAULT_LOG_DIR = Path.home() / ".fks" / "logs"
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Tool Names (for preflight check)
REQUIRED_TOOLS = [
    "ssh",
    "scp",
]
