"""Auth API: register, login, logout, current user."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.config import get_settings
from autocare.db import crud
from autocare.db.engine import get_db
from autocare.dependencies import require_auth
from autocare.schemas import LoginRequest, RegisterRequest, UserRead, dump, envelope
from autocare.services.auth import (
    AuthContext, ROLE_CUSTOMER, create_session, hash_password, read_token,
    remove_session, verify_password,
)
from autocare.services.errors import ConflictError, ValidationError

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session_response(content: dict, token: str, status_code: int = 200) -> JSONResponse:
    auth = get_settings().auth
    response = JSONResponse(status_code=status_code, content=content)
    response.set_cookie(
        auth.cookie_name, token,
        httponly=True, samesite="lax",
        max_age=86400 * auth.session_max_age_days,
    )
    return response


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    if not body.first_name.strip() or not body.email.strip() or not body.password:
        raise ValidationError("First name, email and password are required")
    if await crud.get_user_by_email(db, body.email):
        raise ConflictError("An account with this email already exists")

    user = await crud.create_user(
        db,
        first_name=body.first_name.strip(),
        last_name=body.last_name.strip(),
        email=body.email,
        password_hash=hash_password(body.password),
        role=ROLE_CUSTOMER,
        mobile=body.mobile,
        address=body.address,
    )
    ip = request.client.host if request.client else ""
    token = await create_session(user, db, ip_address=ip)
    return _session_response(
        envelope("Account created", {"user": dump(UserRead, user), "token": token}),
        token, status_code=201,
    )


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user_by_email(db, body.email)
    if not user or not user.is_active or not verify_password(body.password, user.password_hash):
        raise HTTPException(401, "Invalid credentials")

    ip = request.client.host if request.client else ""
    token = await create_session(user, db, ip_address=ip)

    user.last_login_at = datetime.now(timezone.utc)
    await db.commit()

    return _session_response(
        envelope("Logged in", {"user": dump(UserRead, user), "token": token}), token,
    )


@router.post("/logout")
async def logout(
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    token = read_token(request)
    if token:
        await remove_session(token, db)
    response = JSONResponse(content=envelope("Logged out"))
    response.delete_cookie(get_settings().auth.cookie_name)
    return response


@router.get("/me")
async def me(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user(db, auth.user_id)
    data = dump(UserRead, user)
    data["workerId"] = auth.worker_id
    return envelope(data=data)
