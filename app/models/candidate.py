from typing import Optional
from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.db.base import Base, BigIntPK
from app.models import TimestampMixin


class Candidate(Base, TimestampMixin):
    __tablename__ = "candidates"
    __table_args__ = UniqueConstraint(
        "nomination_id", "name", name="uix_nomination_candidate_name"),
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    nomination_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("nominations.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(
        String(512), nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(
        String(512), nullable=True)
    nomination: Mapped["Nomination"] = relationship(
        back_populates="candidates")
