from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Optional

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql.sqltypes import BigInteger, Date, DateTime, Integer, Numeric, String


class Base(DeclarativeBase):
    pass


class PricingMode(StrEnum):
    SINGLE = "single"
    SPLIT = "split"


class EventType(StrEnum):
    WEDDING = "Wedding"
    DEBUT = "Debut"
    BIRTHDAY = "Birthday"
    CORPORATE = "Corporate"
    CHRISTENING = "Christening"
    ANNIVERSARY = "Anniversary"
    OTHERS = "Others"


class ReservationStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Statuses that hold a window on the venue calendar.
ACTIVE_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


def _str_enum(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        values_callable=lambda cls: [e.value for e in cls],
        native_enum=False,
    )


class User(Base):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("open_time < close_time", name="chk_venues_hours"),
        CheckConstraint("capacity_max IS NULL OR capacity_max >= 1", name="chk_venues_capacity"),
        Index("idx_venues_owner", "owner_id"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    open_time: Mapped[str] = mapped_column(String(5), nullable=False, default="00:00")
    close_time: Mapped[str] = mapped_column(String(5), nullable=False, default="23:59")
    rate_mode: Mapped[PricingMode] = mapped_column(
        _str_enum(PricingMode),
        nullable=False,
        default=PricingMode.SINGLE,
    )
    rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    rate_weekday: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    rate_weekend: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    capacity_max: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    reservations: Mapped[list["Reservation"]] = relationship(back_populates="venue")


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="chk_res_window"),
        CheckConstraint("guest_count >= 1", name="chk_res_guest_count"),
        Index("idx_res_venue_date", "venue_id", "event_date"),
        Index("idx_res_user", "user_id"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id"), nullable=False)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    event_name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_type: Mapped[EventType] = mapped_column(_str_enum(EventType), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[ReservationStatus] = mapped_column(
        _str_enum(ReservationStatus),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    venue: Mapped["Venue"] = relationship(back_populates="reservations")
