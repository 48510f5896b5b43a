"""Workout synced from MapMyRide, keyed by the provider's workout id."""

from datetime import datetime

from sqlalchemy import BigInteger, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mapmyride_sync.db.base import Base
from mapmyride_sync.db.types import UTCDateTime


class StoredWorkout(Base):
    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_user_name_started_at", "user_name", "started_at"),)

    # Provider-assigned id, not autoincrement: re-syncs replace the row under the same key
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    kind: Mapped[str] = mapped_column(String(64), nullable=False)
    kcal: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    distance_m: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    speed_mps: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    duration_s: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    step_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    gain_m: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    distances: Mapped[list["StoredDistance"]] = relationship(
        "StoredDistance", order_by="StoredDistance.id", viewonly=True
    )
    positions: Mapped[list["StoredPosition"]] = relationship(
        "StoredPosition", order_by="StoredPosition.id", viewonly=True
    )
    speeds: Mapped[list["StoredSpeed"]] = relationship("StoredSpeed", order_by="StoredSpeed.id", viewonly=True)
    steps: Mapped[list["StoredStep"]] = relationship("StoredStep", order_by="StoredStep.id", viewonly=True)
