from fastapi import APIRouter, Depends, HTTPException

from app.schemas.auth import LoginRequest
from app.schemas.user import UserRead
from app.services.app_state import AppState, get_app_state
from app.utils.errors import StoreError, store_error_to_http

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserRead)
async def login(credentials: LoginRequest, state: AppState = Depends(get_app_state)):
    try:
        return await state.login(credentials.email, credentials.password)
    except StoreError as e:
        raise store_error_to_http(e)


@router.post("/logout")
async def logout(state: AppState = Depends(get_app_state)):
    await state.logout()
    return {"message": "Abgemeldet"}


@router.get("/me", response_model=UserRead)
def me(state: AppState = Depends(get_app_state)):
    if not state.current_user:
        raise HTTPException(status_code=401, detail="Nicht eingeloggt")
    return state.current_user
