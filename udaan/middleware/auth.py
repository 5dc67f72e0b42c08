from fastapi import Depends, Header, HTTPException
from typing import Optional
import jwt

from udaan.config import Settings, get_settings
from udaan.utils.logger import logger


def decode_user_id(token: str, secret: str) -> Optional[str]:
    """
    Verify an HS256 bearer token and return the user ID it carries

    Tokens issued by the Udaan auth service put the user ID in 'id';
    standard 'sub' is accepted as well.
    """
    payload = jwt.decode(token, secret, algorithms=["HS256"], options={"verify_aud": False})
    user_id = payload.get("id") or payload.get("sub")
    return str(user_id) if user_id else None


async def get_optional_user_id(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """
    Optional authentication - returns None unless a valid Bearer token is present

    Invalid tokens never block the request; suggestions work anonymously.

    Usage:
        @router.post("/endpoint")
        async def endpoint(user_id: Optional[str] = Depends(get_optional_user_id)):
            ...
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None

    token = authorization.split(" ", 1)[1].strip()
    try:
        return decode_user_id(token, settings.jwt_secret)
    except jwt.InvalidTokenError as e:
        logger.warning(f"[Auth] Optional auth: invalid token ({type(e).__name__})")
        return None


async def get_user_id(user_id: Optional[str] = Depends(get_optional_user_id)) -> str:
    """Required authentication for per-user data"""
    if not user_id:
        raise HTTPException(
            status_code=401,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user_id
