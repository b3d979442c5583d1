# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Core module initialization
# PURPOSE: Export contracts, wire models and naming
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from core.contracts import Protocol, PortSpecification
from core.models import (
    ComputeHealthCheck,
    AlphaComputeHealthCheck,
    LegacyHTTPHealthCheck,
    LegacyHTTPSHealthCheck,
)
from core.naming import Namer

__all__ = [
    # Enums
    "Protocol",
    "PortSpecification",
    # Models
    "ComputeHealthCheck",
    "AlphaComputeHealthCheck",
    "LegacyHTTPHealthCheck",
    "LegacyHTTPSHealthCheck",
    # Naming
    "Namer",
]
