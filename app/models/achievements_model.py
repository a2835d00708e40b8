# /app/models/achievements_model.py

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Badge(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    color: str
    progress: int = Field(..., ge=0, le=100)
    earnedDate: Optional[str] = Field(default=None, description="YYYY-MM-DD, only once earned.")


class LeaderboardEntry(BaseModel):
    rank: int
    name: str
    initials: str
    points: int
    medal: Optional[Literal["gold", "silver", "bronze"]] = None
    isCurrentUser: bool = False


class Achievements(BaseModel):
    totalPoints: int = 0
    badgesEarned: int = 0
    classRank: Optional[int] = None
    # Holds the graded submission count; the name is kept for API compatibility.
    streakDays: int = 0
    badges: List[Badge] = Field(default_factory=list)
    leaderboard: List[LeaderboardEntry] = Field(default_factory=list)
