"""Saved drink catalog repository: drinks a user has logged before, most recently used first."""
import logging
from typing import List, Optional

from siptrack.domain.SavedDrink import SavedDrink
from siptrack.infra.json_store import atomic_write, read_json_list
from siptrack.infra.paths import SAVED_DRINKS_FILE
from siptrack.utilities.coercion import now_iso, parse_timestamp

logger = logging.getLogger(__name__)


class SavedDrinkRepository:
    def __init__(self, path=SAVED_DRINKS_FILE):
        self.path = path

    def _load(self) -> List[SavedDrink]:
        return [SavedDrink.from_dict(d) for d in read_json_list(self.path)]

    def list(self, user_id: str) -> List[SavedDrink]:
        drinks = [d for d in self._load() if d.user_id == user_id]

        def last_used(drink):
            ts = parse_timestamp(drink.last_used_at)
            return ts.timestamp() if ts else 0.0

        drinks.sort(key=last_used, reverse=True)
        return drinks

    def find(self, user_id: str, name: str, brand: str = "") -> Optional[SavedDrink]:
        for drink in self._load():
            if drink.matches(user_id, name, brand):
                return drink
        return None

    def save(self, drink: SavedDrink) -> SavedDrink:
        """Add a catalog entry, or only refresh last_used_at when it already exists."""
        drinks = self._load()
        for existing in drinks:
            if existing.matches(drink.user_id, drink.name, drink.brand):
                existing.last_used_at = now_iso()
                atomic_write(self.path, [d.to_dict() for d in drinks])
                logger.info(f"Touched saved drink {existing.id}")
                return existing
        drinks.append(drink)
        atomic_write(self.path, [d.to_dict() for d in drinks])
        logger.info(f"Saved new drink {drink.name!r} for user {drink.user_id}")
        return drink
