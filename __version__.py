# ============================================================================
# VERSION - CRYPTO PLATFORM SERVICES
# ============================================================================
"""
Version information for the crypto platform services.

Single source of truth for the version reported by /health.
"""
__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"

CODENAME = "Crypto Platform Services"
