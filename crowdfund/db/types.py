"""Column Types — exact storage for unsigned 64-bit integers.

Invariants:
    - UInt64 round-trips every value in 0..2**64-1 without loss
    - Values are stored zero-padded to 20 digits so text order equals numeric order

Design Decisions:
    - Text-backed over BIGINT: BIGINT is signed 64-bit on both PostgreSQL and SQLite
"""

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

U64_DIGITS = 20


class UInt64(TypeDecorator):
    impl = String(U64_DIGITS)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value)).zfill(U64_DIGITS)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
