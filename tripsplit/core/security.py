from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request
from jose import jwt, JWTError, ExpiredSignatureError

from tripsplit.core.config import settings

ACCESS_TOKEN_TTL = timedelta(hours=1)


def create_access_token(data: dict, expires_in: timedelta = ACCESS_TOKEN_TTL) -> str:
    payload = dict(data)
    payload["exp"] = datetime.now(timezone.utc) + expires_in
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def get_bearer_token(request: Request) -> str:
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing token")
    return auth.split(" ")[1]


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except ExpiredSignatureError:
        raise HTTPException(401, "Token expired")
    except JWTError:
        raise HTTPException(401, "Invalid token")
