from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.domain.SavedDrink import SavedDrink
from siptrack.events.event_helpers import publish_drink_logged, publish_drink_removed
from siptrack.infra import paths
from siptrack.infra.Drink_Repository import DrinkRepository
from siptrack.infra.Saved_Drink_Repository import SavedDrinkRepository
from siptrack.utilities.config import DEFAULT_USER_ID
from siptrack.utilities.validators import DrinkLogInput

router = APIRouter()


def drink_repository() -> DrinkRepository:
    return DrinkRepository(paths.DRINKS_FILE)


def saved_drink_repository() -> SavedDrinkRepository:
    return SavedDrinkRepository(paths.SAVED_DRINKS_FILE)


@router.get("/api/drinks")
def list_drinks(user_id: str = Query(default=DEFAULT_USER_ID), limit: Optional[int] = Query(default=None, ge=1)):
    logs = drink_repository().list(user_id, limit=limit)
    return {"count": len(logs), "items": [log.to_dict() for log in logs]}


@router.post("/api/drinks", status_code=201)
def log_drink(payload: DrinkLogInput, user_id: str = Query(default=DEFAULT_USER_ID)):
    data = payload.model_dump()
    data["user_id"] = user_id
    log = DrinkLog.from_dict(data)
    if log is None:
        raise HTTPException(status_code=422, detail="Invalid timestamp")
    drink_repository().append(log)
    saved_drink_repository().save(SavedDrink.from_drink(log))
    publish_drink_logged(log)
    return log.to_dict()


@router.delete("/api/drinks/{log_id}")
def delete_drink(log_id: str, user_id: str = Query(default=DEFAULT_USER_ID)):
    repo = drink_repository()
    log = repo.get(log_id)
    if log is None or log.user_id != user_id:
        raise HTTPException(status_code=404, detail="Drink log not found")
    repo.remove(log_id)
    publish_drink_removed(log_id, user_id)
    return {"status": "deleted", "id": log_id}


@router.get("/api/saved-drinks")
def list_saved_drinks(user_id: str = Query(default=DEFAULT_USER_ID)):
    drinks = saved_drink_repository().list(user_id)
    return {"count": len(drinks), "items": [d.to_dict() for d in drinks]}
