from __future__ import annotations

from typing import cast

from tautops.tautulli.models import (
    History,
    HistoryItem,
    HistoryMovie,
    MediaType,
    TautulliClientProtocol,
)
from tautops.utils.logger import LoggerProtocol, ensure_logger


def history_movie_to_history(history: HistoryMovie) -> History:
    """
    Ramène un historique de film au format générique (épisodes).

    Les films n'ont ni saison ni épisode : les deux index sont mis à None.
    """
    return {
        "draw": history["draw"],
        "recordsTotal": history["recordsTotal"],
        "recordsFiltered": history["recordsFiltered"],
        "data": [
            HistoryItem(
                user=item["user"],
                date=item["date"],
                duration=item["duration"],
                percent_complete=item["percent_complete"],
                media_index=None,
                parent_media_index=None,
            )
            for item in history["data"]
        ],
    }


def get_item_history(
    client: TautulliClientProtocol,
    rating_key: str,
    media_type: MediaType,
    logger: LoggerProtocol | None = None,
) -> History:
    """
    Récupère l'historique brut d'un item.

    Un film est interrogé par son propre rating key, une série par le rating key
    de la série (`grandparent_rating_key`).
    """
    logger = ensure_logger(logger, __name__)
    params = {media_type.history_param: rating_key}
    data = client.get_obj("get_history", params)

    if media_type is MediaType.MOVIE:
        history = history_movie_to_history(cast(HistoryMovie, data))
    else:
        history = cast(History, data)

    logger.debug(
        "📜 %s %s : %s entrées (%s au total)",
        media_type.value,
        rating_key,
        len(history["data"]),
        history["recordsTotal"],
    )
    return history
