"""
SQLAlchemy ORM models for persistent storage.

Only player settings are persisted; selections and rosters live in memory
for the duration of a session.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserSettingsDB(Base):
    """
    A player's settings snapshot.

    Mirrors models.session.SessionSettings.
    """

    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    language: Mapped[str] = mapped_column(String(8))
    # Enabled pack tokens, sorted
    expansions: Mapped[list[str]] = mapped_column(JSON, default=list)
    use_preset: Mapped[bool] = mapped_column(Boolean, default=True)
    player_count: Mapped[int] = mapped_column(Integer)
    preset_pack: Mapped[str] = mapped_column(String(50))
    preset_chapter: Mapped[int] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserSettingsDB(user_id={self.user_id}, expansions={self.expansions})>"
