from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )


from .user import User  # noqa: E402
from .nomination import Nomination  # noqa: E402
from .candidate import Candidate  # noqa: E402
from .vote import Vote  # noqa: E402

__all__ = ["TimestampMixin", "User", "Nomination", "Candidate", "Vote"]
