"""Domain Types — identity, value and status types for the project lifecycle.

Invariants:
    - ProjectId wraps str — never pass bare str ids through domain logic
    - Amounts, timestamps and durations are unsigned 64-bit integers
    - ProjectStatus is the only source of valid status values (no raw string matching)
    - parse_status is the single place an external status string becomes a ProjectStatus

Design Decisions:
    - Timestamps in nanoseconds since the Unix epoch, same unit as time.time_ns()
    - str Enum: status serializes to JSON and to the DB column without custom encoders
"""

from enum import Enum
from typing import NewType

from crowdfund.core.errors import InvalidStatusError


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", str)


# ─── Value Types ─────────────────────────────────────────────────

Amount = NewType("Amount", int)          # 0 – U64_MAX
Timestamp = NewType("Timestamp", int)    # ns since epoch
Duration = NewType("Duration", int)      # ns

U64_MAX: int = 2**64 - 1


# ─── Enums ───────────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Project lifecycle states — maps to DB `status` column."""
    FUNDING = "Funding"
    SUCCESSFUL = "Successful"
    EXPIRED = "Expired"


TERMINAL_STATUSES: frozenset[ProjectStatus] = frozenset(
    {ProjectStatus.SUCCESSFUL, ProjectStatus.EXPIRED},
)


def parse_status(raw: str) -> ProjectStatus:
    """Parse an external status string. Raises InvalidStatusError if unrecognized."""
    try:
        return ProjectStatus(raw)
    except ValueError:
        raise InvalidStatusError(raw) from None


def fits_u64(value: int) -> bool:
    return 0 <= value <= U64_MAX
