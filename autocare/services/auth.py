"""Authentication service: DB-backed sessions and bcrypt passwords."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import bcrypt
from fastapi import Request, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.config import get_settings
from autocare.models import User, UserSession, Worker

ROLE_CUSTOMER = "customer"
ROLE_WORKER = "worker"
ROLE_ADMIN = "admin"
ROLES = (ROLE_CUSTOMER, ROLE_WORKER, ROLE_ADMIN)


@dataclass
class AuthContext:
    user_id: str
    role: str  # 'customer' | 'worker' | 'admin'
    email: str
    display_name: str
    worker_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def create_session(user: User, db: AsyncSession, ip_address: str = "") -> str:
    """Create a DB-backed session. Returns the raw token (not the hash)."""
    token = secrets.token_urlsafe(48)
    expires_at = datetime.now(timezone.utc) + timedelta(days=get_settings().auth.session_max_age_days)

    session = UserSession(
        user_id=user.id,
        token_hash=_hash_token(token),
        expires_at=expires_at,
        ip_address=ip_address,
    )
    db.add(session)
    await db.commit()
    return token


async def validate_session(token: str, db: AsyncSession) -> User | None:
    """Look up session by token hash, return User if valid."""
    result = await db.execute(
        select(UserSession).where(
            UserSession.token_hash == _hash_token(token),
            UserSession.expires_at > datetime.now(timezone.utc),
        )
    )
    session = result.scalars().first()
    if not session:
        return None

    user = await db.get(User, session.user_id)
    if not user or not user.is_active:
        return None
    return user


async def remove_session(token: str, db: AsyncSession) -> None:
    """Delete a session by token."""
    result = await db.execute(
        select(UserSession).where(UserSession.token_hash == _hash_token(token))
    )
    session = result.scalars().first()
    if session:
        await db.delete(session)
        await db.commit()


def read_token(request: Request) -> str | None:
    """Session token from the cookie, falling back to an Authorization: Bearer header."""
    token = request.cookies.get(get_settings().auth.cookie_name)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value:
        return value.strip()
    return None


async def build_context(user: User, db: AsyncSession) -> AuthContext:
    result = await db.execute(select(Worker.id).where(Worker.user_id == user.id))
    return AuthContext(
        user_id=user.id,
        role=user.role,
        email=user.email,
        display_name=user.display_name,
        worker_id=result.scalars().first(),
    )


async def get_current_user(request: Request, db: AsyncSession) -> AuthContext:
    """Read the session token, validate, return AuthContext or raise 401."""
    token = read_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await validate_session(token, db)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    return await build_context(user, db)
