"""
Middleware package for the punchcard back office.
"""
from .staff_auth import (
    Capability,
    require_capability,
    require_auth,
    create_access_token,
    role_has_capability,
)
