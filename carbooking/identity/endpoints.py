from fastapi import APIRouter, Depends, status

from carbooking.identity.models import AuthSession
from carbooking.identity.permissions import require_session
from carbooking.identity.schemas import LoginForm, RegisterForm
from carbooking.viewmodels import SessionViewModel
from carbooking.web.api.errors import translate_service_errors
from carbooking.web.dependencies import get_session_vm

router = APIRouter()


# -----------------------
# Authentication endpoints
# -----------------------
@router.post("/register", response_model=AuthSession, status_code=status.HTTP_201_CREATED)
@translate_service_errors
async def register(
    payload: RegisterForm,
    vm: SessionViewModel = Depends(get_session_vm),
):
    """Create a customer account and log it in."""
    return await vm.register(payload)


@router.post("/login", response_model=AuthSession)
@translate_service_errors
async def login(
    payload: LoginForm,
    vm: SessionViewModel = Depends(get_session_vm),
):
    """Email/password login. Replaces any previous session."""
    return await vm.login(payload)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
@translate_service_errors
async def logout(vm: SessionViewModel = Depends(get_session_vm)):
    await vm.logout()


@router.get("/me", response_model=AuthSession)
async def read_me(session: AuthSession = Depends(require_session)):
    return session
