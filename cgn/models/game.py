"""Game data model for Campus Gaming Network."""

from typing import Any, List, Optional

from pydantic import Field, model_validator

from cgn.models.base import RecordModel


class Game(RecordModel):
    """A game as embedded in user lists and events."""

    id: str = Field("", description="Game identifier from the game search index")
    name: str = Field("", description="Game title")
    slug: str = Field("", description="URL slug")
    cover: Optional[Any] = Field(None, description="Cover image data from the search index")

    @model_validator(mode="before")
    @classmethod
    def _from_id(cls, value: Any) -> Any:
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return {"id": str(value)}
        return value


def unique_games(games: List[Game]) -> List[Game]:
    """Drop repeated games (by id), keeping the first occurrence and order."""
    seen = set()
    out: List[Game] = []
    for game in games:
        key = game.id or game.name
        if key in seen:
            continue
        seen.add(key)
        out.append(game)
    return out
