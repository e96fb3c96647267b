"""SavedDrink domain entity: catalog entry of a drink the user has logged before."""
from typing import Optional
from uuid import uuid4

from siptrack.utilities.coercion import now_iso, to_non_negative

_NUMERIC_FIELDS = ("volume_ml", "abv_percent", "calories", "carbs_g", "sugar_g", "unit_price")


class SavedDrink:
    def __init__(self, id: str = "", user_id: str = "", brand: str = "", name: str = "",
                 volume_ml: float = 0.0, abv_percent: float = 0.0, calories: float = 0.0,
                 carbs_g: float = 0.0, sugar_g: float = 0.0, unit_price: float = 0.0,
                 created_at: Optional[str] = None, last_used_at: Optional[str] = None):
        self.id = id or uuid4().hex
        self.user_id = user_id
        self.brand = brand
        self.name = name
        self.volume_ml = volume_ml
        self.abv_percent = abv_percent
        self.calories = calories
        self.carbs_g = carbs_g
        self.sugar_g = sugar_g
        self.unit_price = unit_price
        self.created_at = created_at or now_iso()
        self.last_used_at = last_used_at or self.created_at

    def matches(self, user_id: str, name: str, brand: str) -> bool:
        """Same user and same (name, brand), ignoring case and surrounding spaces."""
        return (self.user_id == user_id
                and self.name.strip().lower() == (name or "").strip().lower()
                and self.brand.strip().lower() == (brand or "").strip().lower())

    def __str__(self) -> str:
        return f"{self.brand} {self.name} (last used {self.last_used_at})".strip()

    __repr__ = __str__

    @staticmethod
    def from_drink(drink):
        '''Catalog entry for a logged DrinkLog.'''
        return SavedDrink(
            user_id=drink.user_id, brand=drink.brand, name=drink.name,
            **{k: getattr(drink, k) for k in _NUMERIC_FIELDS},
        )

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return SavedDrink(
            id=str(d.get("id") or ""),
            user_id=str(d.get("user_id") or ""),
            brand=str(d.get("brand") or "").strip(),
            name=str(d.get("name") or "").strip(),
            created_at=d.get("created_at") or None,
            last_used_at=d.get("last_used_at") or None,
            **{k: to_non_negative(d.get(k)) for k in _NUMERIC_FIELDS},
        )

    def to_dict(self):
        d = {
            "id": self.id,
            "user_id": self.user_id,
            "brand": self.brand,
            "name": self.name,
        }
        d.update({k: getattr(self, k) for k in _NUMERIC_FIELDS})
        d["created_at"] = self.created_at
        d["last_used_at"] = self.last_used_at
        return d
