from __future__ import annotations

from typing import Any, cast

import requests

from tautops.tautulli.errors import ConfigError, TautulliApiError
from tautops.tautulli.models import ResponseEnvelope
from tautops.utils.config import TAUTULLI_API_KEY, TAUTULLI_TIMEOUT, TAUTULLI_URL
from tautops.utils.logger import get_logger

API_PATH = "/api/v2"
LOGGER_NAME = "TautulliClient"
logger = get_logger(LOGGER_NAME)


class TautulliClient:
    def __init__(
        self,
        base_url: str = TAUTULLI_URL,
        api_key: str = TAUTULLI_API_KEY,
        timeout: int = TAUTULLI_TIMEOUT,
    ) -> None:
        if not api_key:
            raise ConfigError("TAUTULLI_API_KEY est requis pour interroger Tautulli")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": "tautops/1.0",
            }
        )

    def get_obj(self, cmd: str, params: dict[str, str] | None = None) -> Any:
        """
        Appelle une commande de l'API v2 et renvoie `response.data`.

        Les erreurs HTTP / réseau / JSON remontent telles quelles ; une réponse
        `result != "success"` lève `TautulliApiError`.
        """
        query = {"apikey": self._api_key, "cmd": cmd}
        if params:
            query.update(params)

        logger.debug("🌐 %s %s", cmd, params or {})
        r = self.session.get(f"{self.base_url}{API_PATH}", params=query, timeout=self.timeout)
        r.raise_for_status()
        envelope = cast(ResponseEnvelope, r.json())

        body = envelope["response"]
        if body.get("result") != "success":
            raise TautulliApiError(cmd, body.get("message"))
        return body.get("data")
