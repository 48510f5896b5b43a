"""Per-workout time series. Row id preserves the order samples were fetched in."""

from sqlalchemy import BigInteger, Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from mapmyride_sync.db.base import Base


class StoredDistance(Base):
    __tablename__ = "workout_distances"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    workout_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("workouts.id"), nullable=False, index=True)
    elapsed_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    total_meters: Mapped[float] = mapped_column(Float, nullable=False)


class StoredPosition(Base):
    __tablename__ = "workout_positions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    workout_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("workouts.id"), nullable=False, index=True)
    elapsed_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    elevation: Mapped[float] = mapped_column(Float, nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)


class StoredSpeed(Base):
    __tablename__ = "workout_speeds"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    workout_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("workouts.id"), nullable=False, index=True)
    elapsed_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    meters_per_second: Mapped[float] = mapped_column(Float, nullable=False)


class StoredStep(Base):
    __tablename__ = "workout_steps"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    workout_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("workouts.id"), nullable=False, index=True)
    elapsed_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    steps: Mapped[float] = mapped_column(Float, nullable=False)
