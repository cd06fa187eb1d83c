from sqlalchemy import BigInteger, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base, BigIntPK
from app.models import TimestampMixin


class Vote(Base, TimestampMixin):
    """
    A user's current choice in one nomination.

    The (user_id, nomination_id) constraint is what keeps a user to a single
    row per nomination; a revote rewrites candidate_id and created_at in place.
    """

    __tablename__ = "votes"
    __table_args__ = UniqueConstraint(
        "user_id", "nomination_id", name="uix_user_nomination_unique"),
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False, index=True)
    nomination_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("nominations.id"), nullable=False, index=True)
    candidate_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("candidates.id"), nullable=False, index=True)
