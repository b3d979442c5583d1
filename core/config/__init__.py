# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the health check reconciler.
"""

from core.config.defaults import (
    HealthCheckDefaults,
    NamingDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "HealthCheckDefaults",
    "NamingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
