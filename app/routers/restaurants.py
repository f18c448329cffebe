from fastapi import APIRouter, Depends, HTTPException

from app.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from app.services.app_state import AppState, get_app_state
from app.utils.errors import StoreError, store_error_to_http

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("/", response_model=list[RestaurantRead])
def get_restaurants(state: AppState = Depends(get_app_state)):
    return state.restaurants


@router.post("/refresh", response_model=list[RestaurantRead])
async def refresh_restaurants(state: AppState = Depends(get_app_state)):
    try:
        return await state.refresh_restaurants()
    except StoreError as e:
        raise store_error_to_http(e)


@router.get("/{id}", response_model=RestaurantRead)
def get_restaurant(id: int, state: AppState = Depends(get_app_state)):
    restaurant = state.get_restaurant(id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant nicht gefunden")
    return restaurant


@router.post("/", response_model=RestaurantRead, status_code=201)
async def create_restaurant(data: RestaurantCreate, state: AppState = Depends(get_app_state)):
    try:
        return await state.add_restaurant(data)
    except StoreError as e:
        raise store_error_to_http(e)


@router.patch("/{id}", response_model=RestaurantRead)
async def update_restaurant(id: int, changes: RestaurantUpdate, state: AppState = Depends(get_app_state)):
    try:
        return await state.update_restaurant(id, changes)
    except StoreError as e:
        raise store_error_to_http(e)
