"""Project ORM — the durable id → project map.

Invariants:
    - id is the primary key and never reassigned
    - status stores ProjectStatus values ("Funding" | "Successful" | "Expired")
    - contributors is an ordered JSON array of strings
    - version increments on every UPDATE (optimistic concurrency)

Design Decisions:
    - version_id_col: a read-modify-write that raced another writer fails with
      StaleDataError instead of silently overwriting it
    - No created_at/updated_at: start_time is the only timestamp the record carries
"""

from sqlalchemy import String, Text, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from crowdfund.db.base import Base
from crowdfund.db.types import UInt64


class ProjectRecord(Base):
    """One crowdfunding project, keyed by its allocated id."""
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    creator: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    goal_amount: Mapped[int] = mapped_column(UInt64, nullable=False)
    raised_amount: Mapped[int] = mapped_column(
        UInt64, nullable=False, default=0,
    )
    start_time: Mapped[int] = mapped_column(UInt64, nullable=False)
    deadline: Mapped[int] = mapped_column(UInt64, nullable=False)
    contributors: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Funding", index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
