from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, Response

from app.api.deps import get_current_user, get_optional_user, get_reveal_clock, get_vote_ledger, require_admin
from app.core.exceptions import ForbiddenError
from app.schemas.common import MAX_DB_ID
from app.schemas.user import CurrentUser
from app.schemas.vote import AuditVote, CastVoteRequest, CastVoteResponse, MessageResponse, RevealStatus, TallyGroup, UserVote
from app.services.reveal_clock import RevealClock
from app.services.vote_ledger import VoteLedger


router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=CastVoteResponse, status_code=201)
async def cast_vote(vote: CastVoteRequest,
                    response: Response,
                    current_user: CurrentUser = Depends(get_current_user),
                    ledger: VoteLedger = Depends(get_vote_ledger),
                    clock: RevealClock = Depends(get_reveal_clock)):
    """Cast a vote, or change it if the user already voted in this nomination."""
    if clock.voting_locked():
        raise ForbiddenError("Voting is closed")

    result = await ledger.cast_vote(current_user.id, vote.nomination_id, vote.candidate_id)
    if not result.created:
        response.status_code = 200
    return CastVoteResponse(
        message="Vote submitted successfully" if result.created else "Vote updated successfully",
        success=True,
        vote=result.vote,
    )


@router.get("/my", response_model=List[UserVote])
async def my_votes(current_user: CurrentUser = Depends(get_current_user),
                   ledger: VoteLedger = Depends(get_vote_ledger)):
    return await ledger.get_user_votes(current_user.id)


@router.get("/results", response_model=List[TallyGroup])
async def get_results(nomination_id: Optional[int] = Query(default=None, gt=0, le=MAX_DB_ID),
                      current_user: Optional[CurrentUser] = Depends(get_optional_user),
                      ledger: VoteLedger = Depends(get_vote_ledger),
                      clock: RevealClock = Depends(get_reveal_clock)):
    """Tallies per nomination; hidden from non-admins until the reveal time."""
    is_admin = current_user is not None and current_user.is_admin
    if not clock.results_visible() and not is_admin:
        raise ForbiddenError("Results are not available yet")
    return await ledger.get_results(nomination_id)


@router.get("/reveal", response_model=RevealStatus)
async def reveal_status(clock: RevealClock = Depends(get_reveal_clock)):
    return clock.status()


@router.get("/all", response_model=List[AuditVote], dependencies=[Depends(require_admin)])
async def all_votes(ledger: VoteLedger = Depends(get_vote_ledger)):
    return await ledger.list_all_votes()


@router.delete("/{vote_id}", response_model=MessageResponse)
async def delete_vote(vote_id: int = Path(gt=0, le=MAX_DB_ID),
                      current_user: CurrentUser = Depends(get_current_user),
                      ledger: VoteLedger = Depends(get_vote_ledger),
                      clock: RevealClock = Depends(get_reveal_clock)):
    if clock.voting_locked() and not current_user.is_admin:
        raise ForbiddenError("Voting is closed")
    await ledger.delete_vote(vote_id, current_user.id, current_user.is_admin)
    return MessageResponse(message="Vote deleted successfully")
