import logging
from datetime import datetime, timezone
from itertools import groupby
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, StoreError, VotingError
from app.models.candidate import Candidate
from app.models.nomination import Nomination
from app.models.user import User
from app.models.vote import Vote
from app.schemas.vote import AuditVote, CandidateTally, CastVoteResult, TallyGroup, UserVote, VoteSummary
from app.services.catalog import CatalogStore

# first attempt plus one retry after losing the insert race
MAX_CAST_ATTEMPTS = 2


class VoteLedger:
    """
    Owns the votes table.

    Every public method is one unit of work with its own session. Tallies are
    never stored; they are aggregated from the votes table on each read.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], catalog: CatalogStore):
        self.session_factory = session_factory
        self.catalog = catalog

    async def cast_vote(self, user_id: int, nomination_id: int, candidate_id: int) -> CastVoteResult:
        for attempt in range(MAX_CAST_ATTEMPTS):
            async with self.session_factory() as db:
                try:
                    return await self._upsert_vote(db, user_id, nomination_id, candidate_id)
                except VotingError:
                    await db.rollback()
                    raise
                except IntegrityError as e:
                    # another request inserted the same (user, nomination) first;
                    # the next pass finds that row and updates it instead
                    await db.rollback()
                    logging.warning(
                        f"vote insert conflict for user {user_id} nomination {nomination_id} "
                        f"(attempt {attempt + 1}): {e.orig}")
                except SQLAlchemyError as e:
                    logging.error(f"Failed to cast vote: {e}", exc_info=True)
                    await db.rollback()
                    raise StoreError("Failed to cast vote")

        raise ConflictError("Vote could not be recorded, please retry")

    async def _upsert_vote(self, db: AsyncSession, user_id: int, nomination_id: int,
                           candidate_id: int) -> CastVoteResult:
        if not await self.catalog.nomination_is_active(db, nomination_id):
            raise NotFoundError("Nomination not found or inactive")
        if not await self.catalog.candidate_belongs_to(db, candidate_id, nomination_id):
            raise NotFoundError(
                "Candidate not found or does not belong to this nomination")

        result = await db.execute(
            select(Vote)
            .where(Vote.user_id == user_id)
            .where(Vote.nomination_id == nomination_id)
        )
        vote = result.scalar_one_or_none()
        now = datetime.now(timezone.utc)

        created = vote is None
        if created:
            vote = Vote(
                user_id=user_id,
                nomination_id=nomination_id,
                candidate_id=candidate_id,
                created_at=now,
                updated_at=now,
            )
            db.add(vote)
        else:
            vote.candidate_id = candidate_id
            vote.created_at = now

        await db.commit()
        logging.info(
            f"user {user_id} {'cast' if created else 'changed'} vote {vote.id} "
            f"in nomination {nomination_id} -> candidate {candidate_id}")
        return CastVoteResult(
            vote=VoteSummary(
                id=vote.id,
                nomination_id=nomination_id,
                candidate_id=candidate_id,
                created_at=now,
            ),
            created=created,
        )

    async def get_user_votes(self, user_id: int) -> List[UserVote]:
        """All current votes of one user, most recent first."""
        async with self.session_factory() as db:
            result = await db.execute(
                select(
                    Vote.id,
                    Vote.nomination_id,
                    Vote.candidate_id,
                    Vote.created_at,
                    Nomination.name.label("nomination_name"),
                    Nomination.description.label("nomination_description"),
                    Candidate.name.label("candidate_name"),
                )
                .join(Nomination, Vote.nomination_id == Nomination.id)
                .join(Candidate, Vote.candidate_id == Candidate.id)
                .where(Vote.user_id == user_id)
                .order_by(Vote.created_at.desc(), Vote.id.desc())
            )
            return [UserVote.model_validate(dict(row._mapping)) for row in result]

    async def get_results(self, nomination_id: Optional[int] = None) -> List[TallyGroup]:
        """
        Vote counts per candidate, grouped by nomination.

        Only nominations with at least one vote produce a group. Inside a
        group candidates are ordered by votes descending, then by name.
        """
        vote_count = func.count(Vote.id).label("vote_count")
        query = (
            select(
                Vote.nomination_id,
                Nomination.name.label("nomination_name"),
                Candidate.id.label("candidate_id"),
                Candidate.name.label("candidate_name"),
                vote_count,
            )
            .join(Nomination, Vote.nomination_id == Nomination.id)
            .join(Candidate, Vote.candidate_id == Candidate.id)
            .group_by(Vote.nomination_id, Nomination.name, Candidate.id, Candidate.name)
            .order_by(Vote.nomination_id.asc(), vote_count.desc(), Candidate.name.asc())
        )
        if nomination_id is not None:
            query = query.where(Vote.nomination_id == nomination_id)

        async with self.session_factory() as db:
            rows = (await db.execute(query)).all()

        groups = []
        for (group_id, group_name), group_rows in groupby(
                rows, key=lambda row: (row.nomination_id, row.nomination_name)):
            group_rows = list(group_rows)
            total_votes = sum(row.vote_count for row in group_rows)
            groups.append(TallyGroup(
                nomination_id=group_id,
                nomination_name=group_name,
                total_votes=total_votes,
                candidates=[
                    CandidateTally(
                        candidate_id=row.candidate_id,
                        name=row.candidate_name,
                        votes=row.vote_count,
                        percentage=round(row.vote_count / total_votes * 100, 1),
                    )
                    for row in group_rows
                ],
            ))
        return groups

    async def list_all_votes(self) -> List[AuditVote]:
        """Every vote with its voter, for the admin audit view."""
        async with self.session_factory() as db:
            result = await db.execute(
                select(
                    Vote.id,
                    Vote.user_id,
                    Vote.nomination_id,
                    Vote.candidate_id,
                    Vote.created_at,
                    User.username,
                    User.display_name,
                    Nomination.name.label("nomination_name"),
                    Nomination.description.label("nomination_description"),
                    Candidate.name.label("candidate_name"),
                )
                .join(User, Vote.user_id == User.id)
                .join(Nomination, Vote.nomination_id == Nomination.id)
                .join(Candidate, Vote.candidate_id == Candidate.id)
                .order_by(Vote.created_at.desc(), Vote.id.desc())
            )
            return [AuditVote.model_validate(dict(row._mapping)) for row in result]

    async def delete_vote(self, vote_id: int, requester_id: int, requester_is_admin: bool) -> None:
        async with self.session_factory() as db:
            try:
                vote = await db.get(Vote, vote_id)
                if vote is None:
                    raise NotFoundError("Vote not found")
                if vote.user_id != requester_id and not requester_is_admin:
                    raise ForbiddenError("Not authorized to delete this vote")

                await db.delete(vote)
                await db.commit()
                logging.info(f"vote {vote_id} deleted by user {requester_id}")
            except VotingError:
                raise
            except SQLAlchemyError as e:
                logging.error(f"Failed to delete vote: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to delete vote")
