from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path


def rotate_logs(log_dir: str | Path, days: int, logf: str | None = None) -> list[Path]:
    """
    Supprime les fichiers *.log plus vieux que `days` jours dans `log_dir`.

    `logf` (le fichier du script courant) n'est jamais supprimé. Retourne la liste
    des fichiers effacés.
    """
    if days <= 0:
        return []

    directory = Path(log_dir)
    if not directory.is_dir():
        return []

    keep = Path(logf).resolve() if logf else None
    limit = datetime.now() - timedelta(days=days)
    removed: list[Path] = []

    for path in directory.glob("*.log"):
        if keep is not None and path.resolve() == keep:
            continue
        if datetime.fromtimestamp(path.stat().st_mtime) < limit:
            path.unlink()
            removed.append(path)

    return removed
