from __future__ import annotations

import argparse
import json
import logging

from tautops.tautulli import tautulli_client
from tautops.tautulli.models import MediaType, UserEpisodeWatch, WatchHistory
from tautops.tautulli.watches import get_item_watches
from tautops.utils.logger import get_logger
from tautops.utils.safe_runner import safe_main

LOGGER_NAME = "Tautulli Watches"
logger = get_logger(LOGGER_NAME)


def format_watch_history(history: WatchHistory) -> list[str]:
    lines = []
    for watch in history:
        line = (
            f"{watch.display_name:<20} "
            f"{watch.last_watched.strftime('%Y-%m-%d %H:%M:%S')} UTC  {watch.progress:>3}%"
        )
        if isinstance(watch, UserEpisodeWatch):
            line += f"  S{watch.season:02d}E{watch.episode:02d}"
        lines.append(line)
    return lines


@safe_main
def main(rating_key: str, media_type: str = "movie", as_json: bool = False, debug: bool = False) -> None:
    if debug:
        for name in (LOGGER_NAME, tautulli_client.LOGGER_NAME):
            logging.getLogger(name).setLevel(logging.DEBUG)
        logger.debug("🐛 Mode debug")
    history = get_item_watches(rating_key, MediaType.from_str(media_type), logger=logger)

    if as_json:
        print(json.dumps(history.to_dict(), indent=2, ensure_ascii=False))
        return

    if not history.watches:
        logger.info("⚠️ Aucun visionnage pour %s", rating_key)
        return
    for line in format_watch_history(history):
        print(line)


def run(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Dernier visionnage de chaque utilisateur pour un item Tautulli")
    parser.add_argument("rating_key", help="Rating key du film ou de la série")
    parser.add_argument("--type", dest="media_type", choices=["movie", "tv"], default="movie")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Sortie JSON")
    parser.add_argument("--debug", action="store_true", help="Logs détaillés")
    args = parser.parse_args(argv)
    main(rating_key=args.rating_key, media_type=args.media_type, as_json=args.as_json, debug=args.debug)


if __name__ == "__main__":
    run()
