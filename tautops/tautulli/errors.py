from __future__ import annotations


class TautopsError(Exception):
    """Base de toutes les erreurs levées par tautops."""


class ConfigError(TautopsError):
    pass


class TautulliApiError(TautopsError):
    """Tautulli a répondu, mais avec `result != "success"`."""

    def __init__(self, cmd: str, message: str | None) -> None:
        self.cmd = cmd
        self.message = message
        super().__init__(f"Tautulli API error on {cmd!r}: {message or 'no message'}")


class WatchHistoryError(TautopsError):
    """
    Données d'historique inexploitables pour un item.

    Le `rating_key` est toujours présent dans le message pour retrouver
    l'enregistrement fautif côté Tautulli sans refaire la requête.
    """

    def __init__(self, rating_key: str, detail: str) -> None:
        self.rating_key = rating_key
        self.detail = detail
        super().__init__(f"{detail} (rating key {rating_key})")


class TimestampConversionError(WatchHistoryError):
    def __init__(self, rating_key: str, unix_seconds: int) -> None:
        self.unix_seconds = unix_seconds
        super().__init__(rating_key, f"Failed to parse unix time {unix_seconds!r}")


class MissingEpisodeCoordinatesError(WatchHistoryError):
    def __init__(self, rating_key: str, user: str, field: str) -> None:
        self.user = user
        self.field = field
        super().__init__(rating_key, f"TV watch of user {user!r} has no {field}")
