"""DrinkLog domain entity: one logged serving batch of a drink (brand, nutrition, price, quantity)."""
from typing import Optional
from uuid import uuid4

from siptrack.utilities.coercion import (
    now_iso, parse_timestamp, to_non_negative, to_quantity
)

# Field names written by the older browser client, mapped to ours
_SYNONYMS = {
    "volume": "volume_ml",
    "abv": "abv_percent",
    "carbs": "carbs_g",
    "sugar": "sugar_g",
    "price": "unit_price",
    "cost": "unit_price",
    "date": "timestamp",
    "logged_at": "timestamp",
}

_NUMERIC_FIELDS = ("volume_ml", "abv_percent", "calories", "carbs_g", "sugar_g", "unit_price")


class DrinkLog:
    def __init__(self, id: str = "", brand: str = "", name: str = "", volume_ml: float = 0.0,
                 abv_percent: float = 0.0, calories: float = 0.0, carbs_g: float = 0.0,
                 sugar_g: float = 0.0, unit_price: float = 0.0, quantity: int = 1,
                 timestamp: Optional[str] = None, user_id: str = ""):
        self.id = id or uuid4().hex
        self.brand = brand
        self.name = name
        self.volume_ml = volume_ml
        self.abv_percent = abv_percent
        self.calories = calories
        self.carbs_g = carbs_g
        self.sugar_g = sugar_g
        self.unit_price = unit_price
        self.quantity = quantity
        self.timestamp = timestamp or now_iso()
        self.user_id = user_id

    @property
    def total_price(self) -> float:
        return self.unit_price * self.quantity

    def __str__(self) -> str:
        label = f"{self.brand} {self.name}".strip()
        return (f"{self.quantity}x {label} - {self.calories:g} kcal - {self.abv_percent:g}% ABV"
                f" - ${self.unit_price:.2f} - {self.timestamp}")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Builds a normalized DrinkLog from a stored or submitted dictionary.

        Unknown keys are ignored, numbers are coerced to finite values >= 0 and
        quantity to a whole number >= 1. Returns None when the timestamp is
        present but unreadable, since such a record cannot be placed in time.
        '''
        raw = dict(data) if isinstance(data, dict) else {}
        d = {}
        for key, value in raw.items():
            d.setdefault(_SYNONYMS.get(key, key), value)
        ts_raw = d.get("timestamp")
        if ts_raw in (None, ""):
            timestamp = now_iso()
        else:
            dt = parse_timestamp(ts_raw)
            if dt is None:
                return None
            timestamp = dt.isoformat(timespec="seconds")
        numbers = {k: to_non_negative(d.get(k)) for k in _NUMERIC_FIELDS}
        return DrinkLog(
            id=str(d.get("id") or ""),
            brand=str(d.get("brand") or "").strip(),
            name=str(d.get("name") or "").strip(),
            quantity=to_quantity(d.get("quantity")),
            timestamp=timestamp,
            user_id=str(d.get("user_id") or ""),
            **numbers,
        )

    def to_dict(self):
        '''Converts the DrinkLog to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "user_id": self.user_id,
            "brand": self.brand,
            "name": self.name,
            "volume_ml": self.volume_ml,
            "abv_percent": self.abv_percent,
            "calories": self.calories,
            "carbs_g": self.carbs_g,
            "sugar_g": self.sugar_g,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "timestamp": self.timestamp,
        }
