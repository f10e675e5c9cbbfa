"""FastAPI endpoints for account registration, login and logout."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from agrigo.identity.api.schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterResponse,
    RegisterUserRequest,
    UserSummary,
)
from agrigo.identity.guards import current_principal
from agrigo.identity.login import authenticate, log_out
from agrigo.identity.port import Principal
from agrigo.identity.registration import RegisterUser
from agrigo.identity.user import User

router = APIRouter(prefix="/auth/user", tags=["auth"])


def _summary(user: User) -> UserSummary:
    return UserSummary(user_id=str(user.id), name=user.name, role=user.role)


@router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterUserRequest) -> RegisterResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
        role=body.role.value,
        farm_name=body.farm_name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return RegisterResponse(message="User registered successfully", user=_summary(user))


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest) -> LoginResponse:
    session = authenticate(body.email, body.password)
    return LoginResponse(
        message="Login successful",
        token=session.access_token,
        refresh_token=session.refresh_token,
        user=_summary(session.user),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(principal: Principal = Depends(current_principal)) -> LogoutResponse:
    log_out(principal)
    return LogoutResponse(message="Logged out successfully")
