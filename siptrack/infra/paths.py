from siptrack.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
DRINKS_FILE = DATA_DIR / 'drink_logs.json'
MOODS_FILE = DATA_DIR / 'mood_entries.json'
SAVED_DRINKS_FILE = DATA_DIR / 'saved_drinks.json'
AI_RAW_FILE = DATA_DIR / 'ai_last_raw.txt'

__all__ = ['DATA_DIR', 'DRINKS_FILE', 'MOODS_FILE', 'SAVED_DRINKS_FILE', 'AI_RAW_FILE']
