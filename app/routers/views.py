from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.schemas.views import DashboardResponse, DiscoveryResponse
from app.services.app_state import AppState, get_app_state

router = APIRouter(tags=["views"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    selected_date: Optional[date] = Query(default=None, alias="date"),
    state: AppState = Depends(get_app_state)
):
    """Auslastung und Buchungen des eigenen Restaurants. Ohne Datum: heute."""
    selected = (selected_date or date.today()).isoformat()
    return state.dashboard(selected)


@router.get("/discovery", response_model=DiscoveryResponse)
def get_discovery(
    selected_date: Optional[date] = Query(default=None, alias="date"),
    state: AppState = Depends(get_app_state)
):
    return state.discovery(selected_date.isoformat() if selected_date else None)
