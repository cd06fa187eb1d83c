from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import EntityId


class NominationBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None

    # "   " strips to "" and then fails min_length
    model_config = ConfigDict(str_strip_whitespace=True)


class NominationCreate(NominationBase):
    pass


class NominationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None

    model_config = ConfigDict(str_strip_whitespace=True)


class NominationResponse(NominationBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CandidateBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=512)
    video_url: Optional[str] = Field(default=None, max_length=512)

    model_config = ConfigDict(str_strip_whitespace=True)


class CandidateCreate(CandidateBase):
    nomination_id: EntityId


class CandidateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=512)
    video_url: Optional[str] = Field(default=None, max_length=512)

    model_config = ConfigDict(str_strip_whitespace=True)


class CandidateResponse(CandidateBase):
    id: int
    nomination_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
