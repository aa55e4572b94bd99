from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from tautops.tautulli.errors import MissingEpisodeCoordinatesError, TimestampConversionError
from tautops.tautulli.history import get_item_history
from tautops.tautulli.models import (
    HistoryItem,
    MediaType,
    TautulliClientProtocol,
    UserEpisodeWatch,
    UserMovieWatch,
    WatchHistory,
)
from tautops.tautulli.tautulli_client import TautulliClient
from tautops.utils.logger import LoggerProtocol, ensure_logger, with_child_logger


def unix_seconds_to_date(unix_seconds: int, rating_key: str) -> datetime:
    try:
        return datetime.fromtimestamp(unix_seconds, tz=UTC)
    except (OverflowError, OSError, ValueError, TypeError) as exc:
        raise TimestampConversionError(rating_key, unix_seconds) from exc


def latest_watch_per_user(items: Iterable[HistoryItem]) -> dict[str, HistoryItem]:
    """
    Garde, pour chaque utilisateur, l'entrée la plus récente.

    À date égale, la première entrée rencontrée est conservée.
    """
    latest: dict[str, HistoryItem] = {}
    for item in items:
        current = latest.get(item["user"])
        if current is None or item["date"] > current["date"]:
            latest[item["user"]] = item
    return latest


def _movie_watch(user: str, item: HistoryItem, rating_key: str) -> UserMovieWatch:
    return UserMovieWatch(
        display_name=user,
        last_watched=unix_seconds_to_date(item["date"], rating_key),
        progress=item["percent_complete"],
    )


def _episode_watch(user: str, item: HistoryItem, rating_key: str) -> UserEpisodeWatch:
    season = item.get("parent_media_index")
    episode = item.get("media_index")
    if season is None:
        raise MissingEpisodeCoordinatesError(rating_key, user, "season")
    if episode is None:
        raise MissingEpisodeCoordinatesError(rating_key, user, "episode")

    return UserEpisodeWatch(
        display_name=user,
        last_watched=unix_seconds_to_date(item["date"], rating_key),
        progress=item["percent_complete"],
        season=season,
        episode=episode,
    )


def build_watch_history(
    user_watches: Mapping[str, HistoryItem],
    media_type: MediaType,
    rating_key: str,
) -> WatchHistory:
    """Projette les derniers visionnages dans le type de résultat du média, triés par utilisateur."""
    make = _movie_watch if media_type is MediaType.MOVIE else _episode_watch
    watches = tuple(make(user, user_watches[user], rating_key) for user in sorted(user_watches))
    return WatchHistory(media_type=media_type, rating_key=rating_key, watches=watches)


@with_child_logger
def get_item_watches(
    rating_key: str,
    media_type: MediaType,
    client: TautulliClientProtocol | None = None,
    logger: LoggerProtocol | None = None,
) -> WatchHistory:
    """
    Dernier visionnage de chaque utilisateur pour un film ou une série.

    Une seule requête `get_history` ; toute erreur (réseau, API, données
    incohérentes) interrompt l'appel et remonte à l'appelant.
    """
    logger = ensure_logger(logger, "watches")
    if client is None:
        client = TautulliClient()

    history = get_item_history(client, rating_key, media_type, logger=logger)
    latest = latest_watch_per_user(history["data"])
    result = build_watch_history(latest, media_type, rating_key)

    logger.info(
        "👀 %s %s : %s utilisateur(s) sur %s visionnage(s)",
        media_type.value,
        rating_key,
        len(result),
        len(history["data"]),
    )
    return result
