"""
Configuration constants and environment setup.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# HRMOS ATTENDANCE API (process-wide defaults, overridable per request)
# =============================================================================

HRMOS_API_BASE_URL = os.environ.get("HRMOS_API_BASE_URL", "")
HRMOS_API_KEY = os.environ.get("HRMOS_API_KEY", "")

# Credentials exchanged for a short-lived token when HRMOS_AUTH_SCHEME=TOKEN
HRMOS_KEY_ID = os.environ.get("HRMOS_KEY_ID", "")
HRMOS_KEY_SECRET = os.environ.get("HRMOS_KEY_SECRET", "")

# Supported values: X-API-KEY, BEARER, TOKEN
HRMOS_AUTH_SCHEME = os.environ.get("HRMOS_AUTH_SCHEME", "X-API-KEY")
HRMOS_API_KEY_HEADER = os.environ.get("HRMOS_API_KEY_HEADER", "X-API-KEY")
HRMOS_TOKEN_HEADER = os.environ.get("HRMOS_TOKEN_HEADER", "X-Token")
HRMOS_TOKEN_PATH = os.environ.get("HRMOS_TOKEN_PATH", "/api/v1/authentication/token")
HRMOS_TOKEN_TTL = int(os.environ.get("HRMOS_TOKEN_TTL", "3000"))
HRMOS_TOKEN_SAFETY_MARGIN = max(60, int(os.environ.get("HRMOS_TOKEN_SAFETY_MARGIN", "60")))

# Some tenants require a company identifier in the query string
HRMOS_COMPANY_ID = os.environ.get("HRMOS_COMPANY_ID") or None

# =============================================================================
# PAGINATION / TRANSPORT
# =============================================================================

SUMMARIES_PATH = "/attendance_summaries"
PAGE_SIZE = int(os.environ.get("HRMOS_PAGE_SIZE", "100"))
MAX_PAGES = int(os.environ.get("HRMOS_MAX_PAGES", "5000"))  # Safety net for servers that never send a short page
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("HRMOS_REQUEST_TIMEOUT", "10"))

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

# Default date range for the CLI (YYYY-MM-DD); current month when unset
DEFAULT_FROM = os.environ.get("HRMOS_DEFAULT_FROM", "")
DEFAULT_TO = os.environ.get("HRMOS_DEFAULT_TO", "")

TIMESHEET_HEADERS = ["ID", "Name", "Total Hours", "Overtime"]

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"
