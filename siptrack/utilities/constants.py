from typing import Final

# 3500 kcal is roughly one pound of body fat
CALORIES_PER_POUND: Final[float] = 3500.0
CALORIES_PER_GRAM_CARB: Final[int] = 4

TREND_WINDOW_DAYS: Final[int] = 7
MOOD_TREND_ENTRIES: Final[int] = 7
MOOD_CHART_DAYS: Final[int] = 30

WEEKLY: Final[str] = "weekly"
MONTHLY: Final[str] = "monthly"
PERIODS: Final[tuple[str, ...]] = (WEEKLY, MONTHLY)

MIN_MOOD: Final[int] = 1
MAX_MOOD: Final[int] = 5
NEUTRAL_MOOD: Final[int] = 3
MOOD_LABELS: Final[dict[int, str]] = {
    1: "Very Low",
    2: "Low",
    3: "Neutral",
    4: "Good",
    5: "Excellent",
}
MOOD_EMOJI: Final[dict[int, str]] = {1: "😢", 2: "😔", 3: "😐", 4: "😊", 5: "😄"}
COMMON_MOOD_TAGS: Final[list[str]] = [
    'Work', 'Social', 'Exercise', 'Family', 'Friends', 'Stress', 'Relaxed',
    'Tired', 'Energetic', 'Anxious', 'Happy', 'Sad', 'Excited', 'Bored'
]

DRINK_ANALYSIS_PROMPT: Final[str] = (
    """
    Analyze the image of this alcoholic beverage. Identify its brand, name, and estimate
    its nutritional information for a standard serving. Provide a reasonable price
    estimate in USD for a single serving.
    Standard volumes: beer can/bottle 355 ml, wine glass 150 ml, shot 44 ml.
    Answer ONLY with JSON in the following format:
    """
)
DRINK_JSON_FORMAT: Final[str] = (
    """
{
    "brand": str,
    "name": str,
    "volume_ml": float,
    "abv_percent": float,
    "calories": float,
    "carbs_g": float,
    "sugar_g": float,
    "unit_price": float
}
    """
)
