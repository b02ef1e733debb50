from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TrackRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    artist: str


class MixResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    mood: str
    tracks: list[TrackRef]
    created_at: datetime = Field(alias="createdAt")


class GenerateMixRequest(BaseModel):
    mood: Optional[str] = None


class UploadResponse(BaseModel):
    message: str
    track_id: str = Field(alias="trackId")

    model_config = ConfigDict(populate_by_name=True)


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    artist: str
    selection_count: int = Field(alias="selectionCount")
