from __future__ import annotations

import functools
import sys
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from tautops.utils.logger import get_logger

P = ParamSpec("P")
R = TypeVar("R")


def safe_main(func: Callable[P, R]) -> Callable[P, R]:
    """
    Enveloppe un point d'entrée : toute exception non gérée est loggée avec sa
    trace puis le process sort avec un code non nul.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            get_logger(func.__module__).warning("⛔ Interrompu par l'utilisateur")
            sys.exit(130)
        except Exception as exc:  # pylint: disable=broad-except
            get_logger(func.__module__).exception("💥 Échec de %s : %s", func.__name__, exc)
            sys.exit(1)

    return wrapper
