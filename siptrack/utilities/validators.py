"""
Input validation schemas using Pydantic for request bodies.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class DrinkLogInput(BaseModel):
    """Schema for a drink log submission (manual form or confirmed AI estimate)."""
    brand: str = Field("", max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    volume_ml: float = Field(0, ge=0)
    abv_percent: float = Field(0, ge=0, le=100)
    calories: float = Field(0, ge=0)
    carbs_g: float = Field(0, ge=0)
    sugar_g: float = Field(0, ge=0)
    unit_price: float = Field(0, ge=0)
    quantity: int = Field(1, ge=1, le=100)
    timestamp: Optional[str] = None

    @field_validator('brand', 'name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Drink name cannot be empty')
        return v


class MoodEntryInput(BaseModel):
    """Schema for a mood submission."""
    mood_level: int = Field(..., ge=1, le=5)
    notes: Optional[str] = Field(None, max_length=1000)
    tags: List[str] = Field(default_factory=list)
    timestamp: Optional[str] = None

    @field_validator('notes')
    @classmethod
    def blank_notes_to_none(cls, v):
        if v is None:
            return None
        return v.strip() or None

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        """Keep non-empty tags, dropping repeats while preserving order."""
        seen = set()
        out = []
        for tag in v:
            t = tag.strip() if tag else ''
            if t and t not in seen:
                seen.add(t)
                out.append(t)
        return out


class MoodMigrationInput(BaseModel):
    """Entries kept by an older client (e.g. browser storage) to import."""
    entries: List[dict] = Field(default_factory=list)
