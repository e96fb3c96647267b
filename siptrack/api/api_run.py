from fastapi import FastAPI, Request, Query
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from datetime import datetime
from typing import Optional
import logging

from siptrack.api.api_ai import router as ai_router
from siptrack.api.routes import drinks, moods, reports
from siptrack.api.routes.reports import PERIOD_PATTERN, load_dashboard
from siptrack.events.web_observers import start as start_event_observers, get_events as get_web_events
from siptrack.utilities.config import DEFAULT_USER_ID, TEMPLATES_DIR
from siptrack.utilities.constants import COMMON_MOOD_TAGS, MOOD_EMOJI, MOOD_LABELS, WEEKLY

# Logging
logger = logging.getLogger("siptrack_app")

# Initialize FastAPI app
app = FastAPI(title="SipTrack - Drink, Spending & Mood Tracker")

# Include routers
app.include_router(drinks.router)
app.include_router(moods.router)
app.include_router(reports.router)
app.include_router(ai_router)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Observers are subscribed at import so the feed also works without lifespan events (TestClient)
start_event_observers()


def _ts() -> int:
    """Cache-busting timestamp for client-side assets."""
    return int(datetime.now().timestamp())


# -------------------- UI PAGES --------------------
@app.get("/", response_class=HTMLResponse)
def main_page(request: Request, user_id: str = Query(default=DEFAULT_USER_ID),
              period: str = Query(default=WEEKLY, pattern=PERIOD_PATTERN)):
    dashboard = load_dashboard(user_id, period)
    recent = drinks.drink_repository().list(user_id, limit=20)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "dashboard": dashboard,
            "drinks": recent,
            "user_id": user_id,
            "period": period,
            "mood_options": [(k, MOOD_EMOJI[k], v) for k, v in MOOD_LABELS.items()],
            "mood_tags": COMMON_MOOD_TAGS,
            "time": _ts(),
        }
    )


# -------------------- ACTIVITY FEED --------------------
@app.get('/api/activity')
def api_activity(since: Optional[int] = Query(default=None, ge=0),
                 user_id: Optional[str] = Query(default=None)):
    """Recent drink/mood changes; poll with since=<next_cursor>."""
    return get_web_events(since, user_id)
