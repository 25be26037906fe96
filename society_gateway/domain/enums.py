"""
society_gateway.domain.enums — All enumerations used across the gateway.

Keep this module import-clean (stdlib only).
"""

from enum import Enum


# ---------------------------------------------------------------------------
# HTTP verbs the forwarder understands
# ---------------------------------------------------------------------------

class Verb(str, Enum):
    GET    = "GET"
    POST   = "POST"
    PUT    = "PUT"
    DELETE = "DELETE"

    @property
    def carries_body(self) -> bool:
        return self in (Verb.POST, Verb.PUT)


# ---------------------------------------------------------------------------
# Failure envelope style
# ---------------------------------------------------------------------------

class EnvelopeStyle(str, Enum):
    """
    Shape of the JSON body returned on failure.

    error:    ``{"error": msg}``                      (admin dashboards)
    message:  ``{"success": false, "message": msg}``  (resident dashboards)
    """
    ERROR   = "error"
    MESSAGE = "message"


# ---------------------------------------------------------------------------
# Forwarding outcomes (metrics + logs)
# ---------------------------------------------------------------------------

class Outcome(str, Enum):
    OK         = "ok"
    VALIDATION = "validation"
    BACKEND    = "backend"
    TRANSPORT  = "transport"


# ---------------------------------------------------------------------------
# Backend domain values
# ---------------------------------------------------------------------------

class BillType(str, Enum):
    MAINTENANCE = "Maintenance"
    PARKING     = "Parking"
    WATER       = "Water"
    ELECTRICITY = "Electricity"
    OTHER       = "Other"


class EmployeeStatus(str, Enum):
    ACTIVE   = "Active"
    ON_LEAVE = "On Leave"
    INACTIVE = "Inactive"


class ResidentStatus(str, Enum):
    ACTIVE   = "active"
    INACTIVE = "inactive"


class ComplaintPriority(str, Enum):
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"

