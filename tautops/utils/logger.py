"""Logger du projet tautops."""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, ParamSpec, Protocol, TypeVar, cast

from tautops.utils.config import LOG_FILE_PATH, LOG_LEVEL, LOG_ROTATION_DAYS
from tautops.utils.log_rotation import rotate_logs

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"


# ---------- Protocole (contrat) ----------
class LoggerProtocol(Protocol):
    """
    Interface minimale attendue par les modules tautops.

    Tout objet exposant ces méthodes (logger du projet, faux logger de test)
    peut être passé en paramètre `logger=`.
    """

    def debug(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def info(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def exception(self, msg: str, *args: object, **kwargs: Any) -> None: ...

    def get_child(self, suffix: str) -> LoggerProtocol:
        """
        Get child logger.
        """
        ...


# ---------- Classe concrète (instanciable) ----------


@dataclass(frozen=True)
class TautopsLogger:
    """
    Enveloppe immuable autour d'un `logging.Logger`.

    Les appels sont délégués tels quels au logger standard ; `get_child`
    produit un logger hiérarchique (`parent.suffix`) qui hérite des handlers.
    """

    _base: logging.Logger

    @property
    def name(self) -> str:
        return self._base.name

    def debug(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._base.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args: object, **kwargs: Any) -> None:
        """
        Log au niveau ERROR avec la trace de l'exception en cours.
        """
        self._base.exception(msg, *args, **kwargs)

    def get_child(self, suffix: str) -> LoggerProtocol:
        return TautopsLogger(self._base.getChild(suffix))


def _ensure_handlers(base: logging.Logger, global_log_file: str, script_log_file: str) -> None:
    if getattr(base, "_tautops_configured", False):
        return

    formatter = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    base.addHandler(stream)

    for path in dict.fromkeys((global_log_file, script_log_file)):
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(formatter)
        base.addHandler(fh)

    setattr(base, "_tautops_configured", True)


def _level(name: str) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(script_name: str) -> LoggerProtocol:
    """
    Constructeur de logger.

    Crée le dossier de logs si besoin, purge les vieux fichiers puis attache
    (une seule fois par nom) un handler console, le fichier global du jour et le
    fichier propre au script.

    :param script_name: Nom du script (sert aussi de nom de fichier).
    :return: Logger prêt à l'emploi.
    """
    os.makedirs(LOG_FILE_PATH, exist_ok=True)
    date_str = datetime.now().strftime("%Y-%m-%d")
    global_log_file = os.path.join(LOG_FILE_PATH, f"{date_str}_tautops.log")
    safe_name = script_name.replace(os.sep, "_")
    script_log_file = os.path.join(LOG_FILE_PATH, f"{date_str}_{safe_name}.log")

    base = logging.getLogger(script_name)
    base.setLevel(_level(LOG_LEVEL))
    _ensure_handlers(base, global_log_file, script_log_file)

    try:
        rotate_logs(LOG_FILE_PATH, LOG_ROTATION_DAYS, logf=script_log_file)
    except OSError as exc:
        base.warning("Rotation des logs échouée: %s", exc)

    return TautopsLogger(base)


# ---------- Utilities ----------
def ensure_logger(logger: LoggerProtocol | None, module: str) -> LoggerProtocol:
    """
    Retourne un logger utilisable pour `module`.

    Sans logger fourni on en construit un nouveau, sinon on dérive un enfant
    du logger reçu.
    """
    if logger is None:
        return get_logger(module)
    return logger.get_child(module)


# ---------- Décorateur type-safe ----------
P = ParamSpec("P")
R = TypeVar("R")


def with_child_logger(func: Callable[P, R]) -> Callable[P, R]:
    """
    Injecte dans `kwargs["logger"]` un logger enfant nommé d'après le module décoré.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        current = cast(Optional[LoggerProtocol], kwargs.get("logger"))
        kwargs["logger"] = ensure_logger(current, func.__module__)
        return func(*args, **kwargs)

    return wrapper
