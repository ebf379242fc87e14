# app/trends/models.py
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Integer,
    ForeignKey,
    UniqueConstraint,
)
from app.db.base import Base


class Trend(Base):
    """
    Hashtag. El nombre se guarda normalizado (sin '#', en minúsculas).
    """
    __tablename__ = "trends"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)


class PostTrend(Base):
    __tablename__ = "post_trends"
    __table_args__ = (
        UniqueConstraint("post_id", "trend_id", name="uq_post_trend"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"), index=True
    )
    trend_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trends.id", ondelete="CASCADE"), index=True
    )
