from datetime import datetime
from fastapi import APIRouter, Query, Response

from siptrack.api.routes.drinks import drink_repository
from siptrack.api.routes.moods import mood_repository
from siptrack.infra import paths
from siptrack.infra.pdf_utils import generate_dashboard_pdf
from siptrack.logic.reporting.aggregation import health_series, mood_series, spending_series
from siptrack.logic.reporting.correlation import correlate
from siptrack.logic.reporting.dashboard import build_dashboard
from siptrack.utilities.config import DEFAULT_USER_ID
from siptrack.utilities.constants import WEEKLY
from siptrack.utilities.export_import import DataExporter

router = APIRouter()

PERIOD_PATTERN = r'^(weekly|monthly)$'


def load_dashboard(user_id: str, period: str = WEEKLY) -> dict:
    """Snapshot both stores and build the dashboard payload."""
    drinks = drink_repository().list(user_id)
    moods = mood_repository().list(user_id)
    return build_dashboard(drinks, moods, period=period)


@router.get("/api/dashboard")
def api_dashboard(user_id: str = Query(default=DEFAULT_USER_ID),
                  period: str = Query(default=WEEKLY, pattern=PERIOD_PATTERN)):
    return load_dashboard(user_id, period)


@router.get("/api/charts/spending")
def api_spending_chart(user_id: str = Query(default=DEFAULT_USER_ID),
                       period: str = Query(default=WEEKLY, pattern=PERIOD_PATTERN)):
    series = spending_series(drink_repository().list(user_id), period)
    return {"period": period, "empty": not series, "series": series}


@router.get("/api/charts/health")
def api_health_chart(user_id: str = Query(default=DEFAULT_USER_ID),
                     period: str = Query(default=WEEKLY, pattern=PERIOD_PATTERN)):
    series = health_series(drink_repository().list(user_id), period)
    return {"period": period, "empty": not series, "series": series}


@router.get("/api/charts/mood")
def api_mood_chart(user_id: str = Query(default=DEFAULT_USER_ID)):
    series = mood_series(mood_repository().list(user_id), datetime.now().astimezone())
    return {"empty": not series, "series": series}


@router.get("/api/correlation")
def api_correlation(user_id: str = Query(default=DEFAULT_USER_ID)):
    return correlate(drink_repository().list(user_id), mood_repository().list(user_id))


@router.get("/export_pdf")
def export_pdf(user_id: str = Query(default=DEFAULT_USER_ID),
               period: str = Query(default=WEEKLY, pattern=PERIOD_PATTERN)):
    pdf_bytes = generate_dashboard_pdf(load_dashboard(user_id, period), user_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="siptrack_{user_id}.pdf"'},
    )


@router.get("/api/export/{data_type}.csv")
def export_csv(data_type: str, user_id: str = Query(default=DEFAULT_USER_ID)):
    exporter = DataExporter(paths.DRINKS_FILE, paths.MOODS_FILE)
    if data_type == "drinks":
        text = exporter.drinks_csv(user_id)
    elif data_type == "moods":
        text = exporter.moods_csv(user_id)
    else:
        return Response(status_code=404, content="Unknown export")
    return Response(
        content=text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{data_type}_{user_id}.csv"'},
    )
