# api/auth.py
"""
Auth API
Minimal registration and login
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..dependencies import get_user_store
from ..interfaces import User, UserExistsError, UserStore
from ..schemas import ErrorResponse, LoginRequest, LoginResponse, RegisterRequest, UserPublic


router = APIRouter(prefix="/api/auth", tags=["auth"])


def to_public(user: User) -> UserPublic:
    return UserPublic(
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone,
        created_at=user.created_at,
    )


@router.post(
    "/register",
    response_model=UserPublic,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def register(body: RegisterRequest, store: UserStore = Depends(get_user_store)):
    """Register a new user"""
    try:
        user = store.register(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            phone=body.phone,
            password=body.password,
        )
    except UserExistsError as e:
        return JSONResponse(status_code=409, content={"error": str(e)})
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    return to_public(user)


@router.post("/login", response_model=LoginResponse, responses={401: {"model": ErrorResponse}})
def login(body: LoginRequest, store: UserStore = Depends(get_user_store)):
    """Check email and password"""
    user = store.authenticate(body.email, body.password)
    if user is None:
        return JSONResponse(status_code=401, content={"error": "Invalid credentials"})

    return LoginResponse(message="Login successful", user=to_public(user))
