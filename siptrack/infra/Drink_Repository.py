"""Drink log repository (JSON file persistence)."""
import logging
from typing import List, Optional, Tuple

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.infra.json_store import atomic_write, read_json_list
from siptrack.infra.paths import DRINKS_FILE
from siptrack.utilities.coercion import parse_timestamp

logger = logging.getLogger(__name__)


def _read_rows(path) -> Tuple[List[DrinkLog], List[dict]]:
    """Parsed logs plus the raw rows whose timestamp cannot be read."""
    logs, unreadable = [], []
    for entry in read_json_list(path):
        log = DrinkLog.from_dict(entry)
        if log is None:
            logger.warning(f"Skipping drink log with unreadable timestamp: {entry!r}")
            unreadable.append(entry)
            continue
        logs.append(log)
    return logs, unreadable


def load_drink_logs(path=DRINKS_FILE) -> List[DrinkLog]:
    """Read every stored log through DrinkLog.from_dict; unreadable rows are skipped."""
    return _read_rows(path)[0]


class DrinkRepository:
    def __init__(self, path=DRINKS_FILE):
        self.path = path

    def list(self, user_id: str, limit: Optional[int] = None) -> List[DrinkLog]:
        """Logs of one user, newest first."""
        logs = [log for log in load_drink_logs(self.path) if log.user_id == user_id]
        logs.sort(key=lambda log: parse_timestamp(log.timestamp), reverse=True)
        return logs[:limit] if limit else logs

    def get(self, log_id: str) -> Optional[DrinkLog]:
        for log in load_drink_logs(self.path):
            if log.id == log_id:
                return log
        return None

    def _save(self, logs: List[DrinkLog], unreadable: List[dict]) -> None:
        # rows we cannot parse are written back untouched
        atomic_write(self.path, [entry.to_dict() for entry in logs] + unreadable)

    def append(self, log: DrinkLog) -> DrinkLog:
        logs, unreadable = _read_rows(self.path)
        logs.append(log)
        self._save(logs, unreadable)
        logger.info(f"Logged drink {log.id} for user {log.user_id}")
        return log

    def remove(self, log_id: str) -> bool:
        """Delete by id; False when no such log exists."""
        logs, unreadable = _read_rows(self.path)
        kept = [log for log in logs if log.id != log_id]
        if len(kept) == len(logs):
            return False
        self._save(kept, unreadable)
        logger.info(f"Removed drink log {log_id}")
        return True
