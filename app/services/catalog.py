import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError, VotingError
from app.models.candidate import Candidate
from app.models.nomination import Nomination
from app.models.vote import Vote
from app.schemas.catalog import CandidateCreate, CandidateUpdate, NominationCreate, NominationUpdate


class CatalogStore:
    """Nominations and their candidates."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # checks used by the vote ledger inside its own unit of work

    async def nomination_is_active(self, db: AsyncSession, nomination_id: int) -> bool:
        result = await db.execute(
            select(Nomination.id)
            .where(Nomination.id == nomination_id)
            .where(Nomination.is_active.is_(True))
        )
        return result.scalar_one_or_none() is not None

    async def candidate_belongs_to(self, db: AsyncSession, candidate_id: int, nomination_id: int) -> bool:
        result = await db.execute(
            select(Candidate.id)
            .where(Candidate.id == candidate_id)
            .where(Candidate.nomination_id == nomination_id)
        )
        return result.scalar_one_or_none() is not None

    # nominations

    async def list_nominations(self) -> List[Nomination]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Nomination)
                .where(Nomination.is_active.is_(True))
                .order_by(Nomination.created_at.desc(), Nomination.id.desc())
            )
            return list(result.scalars().all())

    async def get_nomination(self, nomination_id: int) -> Nomination:
        async with self.session_factory() as db:
            nomination = await db.get(Nomination, nomination_id)
            if nomination is None:
                raise NotFoundError("Nomination not found")
            return nomination

    async def create_nomination(self, data: NominationCreate) -> Nomination:
        async with self.session_factory() as db:
            try:
                nomination = Nomination(
                    name=data.name.strip(),
                    description=data.description,
                    is_active=True
                )
                db.add(nomination)
                await db.commit()
                return nomination
            except SQLAlchemyError as e:
                logging.error(f"Failed to create nomination: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to create nomination")

    async def update_nomination(self, nomination_id: int, data: NominationUpdate) -> Nomination:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")

        async with self.session_factory() as db:
            try:
                nomination = await db.get(Nomination, nomination_id)
                if nomination is None:
                    raise NotFoundError("Nomination not found")
                if "name" in changes:
                    if changes["name"] is None:
                        raise ValidationError("Nomination name cannot be empty")
                    nomination.name = changes["name"].strip()
                if "description" in changes:
                    nomination.description = changes["description"]
                if changes.get("is_active") is not None:
                    nomination.is_active = changes["is_active"]
                await db.commit()
                return nomination
            except VotingError:
                raise
            except SQLAlchemyError as e:
                logging.error(f"Failed to update nomination: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to update nomination")

    async def deactivate_nomination(self, nomination_id: int) -> None:
        """Soft delete: the nomination leaves every listing but its votes are kept."""
        async with self.session_factory() as db:
            try:
                nomination = await db.get(Nomination, nomination_id)
                if nomination is None:
                    raise NotFoundError("Nomination not found")
                nomination.is_active = False
                await db.commit()
                logging.info(f"nomination {nomination_id} deactivated")
            except VotingError:
                raise
            except SQLAlchemyError as e:
                logging.error(f"Failed to delete nomination: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to delete nomination")

    # candidates

    async def list_candidates(self, nomination_id: int) -> List[Candidate]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Candidate)
                .where(Candidate.nomination_id == nomination_id)
                .order_by(Candidate.name.asc())
            )
            return list(result.scalars().all())

    async def get_candidate(self, candidate_id: int) -> Candidate:
        async with self.session_factory() as db:
            candidate = await db.get(Candidate, candidate_id)
            if candidate is None:
                raise NotFoundError("Candidate not found")
            return candidate

    async def create_candidate(self, data: CandidateCreate) -> Candidate:
        name = data.name.strip()
        async with self.session_factory() as db:
            try:
                nomination = await db.get(Nomination, data.nomination_id)
                if nomination is None:
                    raise NotFoundError("Nomination not found")

                existing = await db.execute(
                    select(Candidate.id)
                    .where(Candidate.nomination_id == data.nomination_id)
                    .where(Candidate.name == name)
                )
                if existing.scalar_one_or_none() is not None:
                    raise ConflictError(
                        "Candidate with this name already exists for this nomination")

                candidate = Candidate(
                    nomination_id=data.nomination_id,
                    name=name,
                    image_url=_clean_url(data.image_url),
                    video_url=_clean_url(data.video_url),
                )
                db.add(candidate)
                await db.commit()
                return candidate
            except VotingError:
                raise
            except IntegrityError:
                # lost a race against an identical insert
                await db.rollback()
                raise ConflictError(
                    "Candidate with this name already exists for this nomination")
            except SQLAlchemyError as e:
                logging.error(f"Failed to create candidate: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to create candidate")

    async def update_candidate(self, candidate_id: int, data: CandidateUpdate) -> Candidate:
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")

        async with self.session_factory() as db:
            try:
                candidate = await db.get(Candidate, candidate_id)
                if candidate is None:
                    raise NotFoundError("Candidate not found")
                if "name" in changes:
                    if changes["name"] is None:
                        raise ValidationError("Candidate name cannot be empty")
                    candidate.name = changes["name"].strip()
                if "image_url" in changes:
                    candidate.image_url = _clean_url(changes["image_url"])
                if "video_url" in changes:
                    candidate.video_url = _clean_url(changes["video_url"])
                await db.commit()
                return candidate
            except VotingError:
                raise
            except IntegrityError:
                await db.rollback()
                raise ConflictError(
                    "Candidate with this name already exists for this nomination")
            except SQLAlchemyError as e:
                logging.error(f"Failed to update candidate: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to update candidate")

    async def delete_candidate(self, candidate_id: int) -> None:
        """Hard delete, refused while any vote still points at the candidate."""
        async with self.session_factory() as db:
            try:
                candidate = await db.get(Candidate, candidate_id)
                if candidate is None:
                    raise NotFoundError("Candidate not found")

                vote_count = await db.scalar(
                    select(func.count()).select_from(Vote)
                    .where(Vote.candidate_id == candidate_id)
                )
                if vote_count:
                    raise ConflictError(
                        "Cannot delete candidate with existing votes")

                await db.delete(candidate)
                await db.commit()
            except VotingError:
                raise
            except IntegrityError:
                # a vote landed between the count and the delete
                await db.rollback()
                raise ConflictError("Cannot delete candidate with existing votes")
            except SQLAlchemyError as e:
                logging.error(f"Failed to delete candidate: {e}", exc_info=True)
                await db.rollback()
                raise StoreError("Failed to delete candidate")


def _clean_url(value):
    if value is None:
        return None
    value = value.strip()
    return value or None
