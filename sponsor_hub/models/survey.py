from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Text, Boolean, UniqueConstraint
from sponsor_hub.db.base import Base, TimestampedMixin

class Survey(TimestampedMixin, Base):
    __tablename__ = "surveys"

    # one survey per user
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), default="", index=True)
    github_id: Mapped[str] = mapped_column(String(255), default="")
    priorities: Mapped[str] = mapped_column(Text, default="")
    issues: Mapped[str] = mapped_column(Text, default="")
    comms_frequency: Mapped[str] = mapped_column(String(255), default="")
    pre_release: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    privacy: Mapped[str] = mapped_column(String(255), default="")

    user = relationship("User", back_populates="survey")
    sponsors = relationship(
        "SurveySponsor",
        back_populates="survey",
        cascade="all, delete-orphan"
    )


class SurveySponsor(TimestampedMixin, Base):
    __tablename__ = "survey_sponsors"
    __table_args__ = (
        UniqueConstraint("survey_id", "user_id", name="uq_survey_sponsor"),
    )

    survey_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("surveys.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )

    survey = relationship("Survey", back_populates="sponsors")
    user = relationship("User", back_populates="sponsorships")
