from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from app.schemas.common import EntityId


class CastVoteRequest(BaseModel):
    nomination_id: EntityId
    candidate_id: EntityId


class VoteSummary(BaseModel):
    id: int
    nomination_id: int
    candidate_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CastVoteResult(BaseModel):
    vote: VoteSummary
    created: bool


class CastVoteResponse(BaseModel):
    message: str
    success: bool
    vote: VoteSummary


class UserVote(VoteSummary):
    nomination_name: str
    nomination_description: Optional[str] = None
    candidate_name: str


class AuditVote(UserVote):
    user_id: int
    username: str
    display_name: Optional[str] = None


class CandidateTally(BaseModel):
    candidate_id: int
    name: str
    votes: int
    percentage: float


class TallyGroup(BaseModel):
    nomination_id: int
    nomination_name: str
    total_votes: int
    candidates: List[CandidateTally]


class RevealStatus(BaseModel):
    reveal_at: Optional[datetime] = None
    results_visible: bool
    voting_locked: bool


class MessageResponse(BaseModel):
    message: str
