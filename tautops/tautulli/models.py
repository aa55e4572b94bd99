from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Protocol, TypedDict, Union


class MediaType(str, Enum):
    MOVIE = "movie"
    TV = "tv"

    @classmethod
    def from_str(cls, value: str) -> MediaType:
        key = value.strip().lower()
        # Plex type names used for TV items
        if key in ("show", "episode", "season"):
            return cls.TV
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown media type: {value!r}") from None

    @property
    def history_param(self) -> str:
        """Query key used by `get_history` : le film lui-même ou la série parente."""
        return "rating_key" if self is MediaType.MOVIE else "grandparent_rating_key"


# --- Tautulli raw payloads (subset utile) ------------------------------------


class HistoryMovieItem(TypedDict):
    user: str
    date: int
    duration: int
    percent_complete: int


class HistoryItem(TypedDict):
    user: str
    date: int
    duration: int
    percent_complete: int
    media_index: int | None  # épisode
    parent_media_index: int | None  # saison


class HistoryMovie(TypedDict):
    draw: int
    recordsTotal: int
    recordsFiltered: int
    data: list[HistoryMovieItem]


class History(TypedDict):
    draw: int
    recordsTotal: int
    recordsFiltered: int
    data: list[HistoryItem]


class ResponseBody(TypedDict, total=False):
    result: str  # "success" | "error"
    message: str | None
    data: Any


class ResponseEnvelope(TypedDict):
    response: ResponseBody


JsonObj = dict[str, Any]


# ---- Client minimal (ce qu'on utilise vraiment) -----------------------------
class TautulliClientProtocol(Protocol):
    def get_obj(self, cmd: str, params: dict[str, str] | None = None) -> Any: ...


# --- Résultats ---------------------------------------------------------------


@dataclass(frozen=True)
class UserMovieWatch:
    display_name: str
    last_watched: datetime
    progress: int

    def to_dict(self) -> JsonObj:
        return {
            "display_name": self.display_name,
            "last_watched": self.last_watched.isoformat(),
            "progress": self.progress,
        }


@dataclass(frozen=True)
class UserEpisodeWatch:
    display_name: str
    last_watched: datetime
    progress: int
    season: int
    episode: int

    def to_dict(self) -> JsonObj:
        return {
            "display_name": self.display_name,
            "last_watched": self.last_watched.isoformat(),
            "progress": self.progress,
            "season": self.season,
            "episode": self.episode,
        }


UserWatch = Union[UserMovieWatch, UserEpisodeWatch]


@dataclass(frozen=True)
class WatchHistory:
    """Dernier visionnage de chaque utilisateur pour un item, trié par utilisateur."""

    media_type: MediaType
    rating_key: str
    watches: tuple[UserWatch, ...] = ()

    def __len__(self) -> int:
        return len(self.watches)

    def __iter__(self) -> Iterator[UserWatch]:
        return iter(self.watches)

    def to_dict(self) -> JsonObj:
        return {
            "media_type": self.media_type.value,
            "rating_key": self.rating_key,
            "watches": [w.to_dict() for w in self.watches],
        }
