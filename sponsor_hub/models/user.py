import enum
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Boolean, DateTime
from sponsor_hub.db.base import Base, TimestampedMixin


class UserPermissions(enum.IntEnum):
    """Ordered permission tiers; access checks compare with >=."""
    USER = 1
    EDITOR = 2
    ADMIN = 3


class User(TimestampedMixin, Base):
    __tablename__ = "users"

    # public
    name: Mapped[str] = mapped_column(String(255), default="", index=True)

    # privileged: visible to the user themselves and to admins
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    confirmed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    permissions: Mapped[int] = mapped_column(
        Integer, default=int(UserPermissions.USER), nullable=False, index=True
    )

    # never serialized
    password: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    confirm_verifier: Mapped[str | None] = mapped_column(String(255))
    recover_verifier: Mapped[str | None] = mapped_column(String(255))
    recover_token_expiry: Mapped[datetime | None] = mapped_column(DateTime)
    attempt_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_attempt: Mapped[datetime | None] = mapped_column(DateTime)
    locked: Mapped[datetime | None] = mapped_column(DateTime)  # locked until

    survey = relationship(
        "Survey",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    sponsorships = relationship(
        "SurveySponsor",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def has_permission(self, required: UserPermissions) -> bool:
        return self.permissions >= required
