import os
import tempfile

import pytest

# Les logs des tests ne doivent pas atterrir dans le dossier du projet.
os.environ["LOG_FILE_PATH"] = tempfile.mkdtemp(prefix="tautops-logs-")
os.environ.setdefault("TAUTULLI_API_KEY", "test-key")


class RecordingLogger:
    """Faux logger : accumule (niveau, message formaté)."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _log(self, level: str, msg: str, *args: object) -> None:
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg, *args, **kwargs):
        self._log("debug", msg, *args)

    def info(self, msg, *args, **kwargs):
        self._log("info", msg, *args)

    def warning(self, msg, *args, **kwargs):
        self._log("warning", msg, *args)

    def error(self, msg, *args, **kwargs):
        self._log("error", msg, *args)

    def exception(self, msg, *args, **kwargs):
        self._log("exception", msg, *args)

    def get_child(self, suffix):
        return self


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
