from dataclasses import dataclass
from datetime import datetime, timezone

import jwt
from fastapi import HTTPException, Request, status

from weekplan.core.config import Settings


@dataclass
class HouseholdContext:
    UserId: int
    HouseholdId: int


def _require_secret() -> str:
    secret = Settings.JwtSecretKey
    if not secret:
        raise RuntimeError("Missing required env var: JWT_SECRET_KEY")
    return secret


def _decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, _require_secret(), algorithms=["HS256"])
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc


def _claim_as_int(payload: dict, name: str) -> int:
    value = payload.get(name)
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc
    if parsed <= 0:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return parsed


def RequireHousehold(request: Request) -> HouseholdContext:
    """Resolve the caller's household from the bearer token issued upstream."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    token = auth_header.replace("Bearer ", "", 1).strip()
    payload = _decode_access_token(token)
    return HouseholdContext(
        UserId=_claim_as_int(payload, "sub"),
        HouseholdId=_claim_as_int(payload, "household_id"),
    )


def NowUtc() -> datetime:
    return datetime.now(tz=timezone.utc)
