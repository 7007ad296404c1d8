"""Framework-independent request handlers."""

from tdeecoach.api.handlers import (
    handle_calculation_request,
    handle_coaching_request,
    handle_lifestyle_analysis_request,
)
from tdeecoach.api.response import ApiResponse
from tdeecoach.api.validators import validate_profile_payload

__all__ = [
    "ApiResponse",
    "handle_calculation_request",
    "handle_coaching_request",
    "handle_lifestyle_analysis_request",
    "validate_profile_payload",
]
