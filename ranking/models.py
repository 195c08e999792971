"""
Golf league domain records (Pydantic)

Rounds, games, courses, seasons and player profiles as they arrive from the
data store. The scoring core only ever reads these; recalculation produces
copies instead of mutating them.
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import date, datetime
from enum import Enum


class GameStatus(str, Enum):
    """Round state"""
    ACTIVE = "active"
    COMPLETED = "completed"


class Course(BaseModel):
    """Golf course"""
    id: Optional[str] = Field(None, description="Course ID")
    name: str = Field(..., description="Course name")
    par: Optional[int] = Field(None, gt=0, description="Course par (None when unknown)")
    location: Optional[str] = Field(None, description="Location")

    class Config:
        frozen = True


class Season(BaseModel):
    """Competition season"""
    id: str = Field(..., description="Season ID")
    name: str = Field(..., description="Season name")
    code: Optional[str] = Field(None, description="Join code")
    start_date: Optional[date] = Field(None, description="First day")
    end_date: Optional[date] = Field(None, description="Last day")
    is_active: bool = Field(default=True, description="Accepting joins/submissions")

    class Config:
        frozen = True


class Game(BaseModel):
    """A scheduled round at a course within a season"""
    id: str = Field(..., description="Game ID")
    name: Optional[str] = Field(None, description="Game name")
    season_id: Optional[str] = Field(None, description="Owning season")
    course: Optional[Course] = Field(None, description="Course played")
    game_date: Optional[date] = Field(None, description="Date played")
    status: GameStatus = Field(default=GameStatus.ACTIVE, description="Round state")

    class Config:
        frozen = True
        use_enum_values = True

    @property
    def par(self) -> Optional[int]:
        return self.course.par if self.course else None


class RoundScore(BaseModel):
    """One player's result in one game"""
    id: str = Field(..., description="Score ID")
    player_id: str = Field(..., description="Player ID")
    game_id: str = Field(..., description="Game ID")
    raw_score: int = Field(..., gt=0, description="Stroke count")
    points: int = Field(default=0, ge=0, description="Awarded points")
    bonus_points: int = Field(default=0, ge=0, description="Best-score bonus")
    submitted_at: datetime = Field(..., description="Submission time")

    # embedded game metadata
    season_id: Optional[str] = Field(None, description="Season of the game")
    course_par: Optional[int] = Field(None, gt=0, description="Par of the course played")
    game_date: Optional[date] = Field(None, description="Date of the game")
    player_name: Optional[str] = Field(None, description="Player display name")

    class Config:
        frozen = True

    @property
    def total_points(self) -> int:
        return self.points + self.bonus_points

    @property
    def has_bonus(self) -> bool:
        return self.bonus_points > 0

    @property
    def differential(self) -> Optional[int]:
        """Strokes relative to par, None when par is unknown"""
        if self.course_par is None:
            return None
        return self.raw_score - self.course_par

    def with_points(self, points: int, bonus_points: int) -> "RoundScore":
        """Copy carrying recalculated point values (validated)"""
        data = self.model_dump()
        data.update(points=points, bonus_points=bonus_points)
        return RoundScore(**data)


class PlayerProfile(BaseModel):
    """Player profile"""
    id: str = Field(..., description="Player ID")
    username: str = Field(..., description="Display name")
    handicap: Optional[float] = Field(None, description="Current handicap index")
    bio: Optional[str] = Field(None, description="Short bio")
    profile_image_url: Optional[str] = Field(None, description="Avatar URL")
    raw_data: Optional[Dict[str, Any]] = Field(None, description="Source row")

    class Config:
        frozen = True
