import logging

from fastapi import APIRouter, Depends, HTTPException

from app.schemas.booking import BookingRead, BookingRequest, BookingPartitionResponse
from app.services.app_state import AppState, NoSlotAvailable, get_app_state
from app.utils.errors import StoreError, store_error_to_http

logger = logging.getLogger("app.routers.bookings")

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=BookingPartitionResponse)
def get_bookings(state: AppState = Depends(get_app_state)):
    partition = state.bookings()
    return BookingPartitionResponse(upcoming=partition.upcoming, past=partition.past)


@router.get("/restaurant/{restaurant_id}", response_model=list[BookingRead])
def get_bookings_by_restaurant(restaurant_id: int, state: AppState = Depends(get_app_state)):
    return state.get_bookings_by_restaurant(restaurant_id)


@router.get("/user/{user_id}", response_model=list[BookingRead])
def get_bookings_by_user(user_id: str, state: AppState = Depends(get_app_state)):
    return state.get_bookings_by_user(user_id)


@router.post("/", response_model=BookingRead, status_code=201)
async def create_booking(request: BookingRequest, state: AppState = Depends(get_app_state)):
    """
    Neue Buchung. mode=instant -> sofort bestätigt (heute),
    mode=scheduled -> pending bis der Betreiber bestätigt.
    """
    try:
        return await state.book(request)
    except NoSlotAvailable as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreError as e:
        raise store_error_to_http(e)


@router.post("/{id}/confirm", response_model=BookingRead)
async def confirm_booking(id: str, state: AppState = Depends(get_app_state)):
    try:
        return await state.confirm_booking(id)
    except StoreError as e:
        raise store_error_to_http(e)


@router.post("/{id}/reject", response_model=BookingRead)
async def reject_booking(id: str, state: AppState = Depends(get_app_state)):
    try:
        return await state.reject_booking(id)
    except StoreError as e:
        raise store_error_to_http(e)


@router.post("/{id}/cancel", response_model=BookingRead)
async def cancel_booking(id: str, state: AppState = Depends(get_app_state)):
    try:
        return await state.cancel_booking(id)
    except StoreError as e:
        raise store_error_to_http(e)


# Löscht den Datensatz komplett (im Gegensatz zu cancel)
@router.delete("/{id}")
async def delete_booking(id: str, state: AppState = Depends(get_app_state)):
    try:
        await state.delete_booking(id)
    except StoreError as e:
        raise store_error_to_http(e)
    return {"message": "Buchung gelöscht"}
