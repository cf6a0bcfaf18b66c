from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class GameConfig(BaseModel):
    """Rules applied to every play-through."""

    questions_per_game: int = Field(10, ge=1)
    points_per_correct: int = Field(100, ge=1)
    answer_pause_seconds: float = Field(
        1.0, ge=0, description="Pause after an answer before the next question is offered."
    )


class LeaderboardConfig(BaseModel):
    """Size and storage slot of the persisted high-score list."""

    capacity: int = Field(10, ge=1)
    storage_key: str = Field("triviaHighScores", pattern=r"^[A-Za-z0-9_.-]+$")
    preview_size: int = Field(3, ge=0, description="Entries shown before a game starts.")


class PathsConfig(BaseModel):
    """Filesystem layout for the question source and persisted state."""

    questions_file: Path | None = Field(
        None, description="Question document; None uses the bundled question set."
    )
    data_dir: Path = Field(Path("data"))


class LoggingConfig(BaseModel):
    """Controls for logging output and format."""

    level: str = Field("INFO")
    use_json: bool = False


class Settings(BaseModel):
    """Top-level configuration aggregating all sub-settings."""

    project_name: str = Field("Trivia")
    game: GameConfig = Field(default_factory=GameConfig)
    leaderboard: LeaderboardConfig = Field(default_factory=LeaderboardConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
