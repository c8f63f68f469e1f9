"""Request identity for engine endpoints: API key + external user id."""

from fastapi import Header, HTTPException

from healthcore.config import settings

_BEARER = "Bearer "


def _presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key is not None:
        return x_api_key
    if authorization and authorization.startswith(_BEARER):
        return authorization[len(_BEARER):].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Check the engine key from X-API-Key or Authorization: Bearer.

    With ENGINE_API_KEY unset every request passes.
    """
    expected = settings.engine_api_key
    if expected is None:
        return ""
    key = _presented_key(x_api_key, authorization)
    if key != expected:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return key


async def current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Stable user id forwarded by the identity provider in front of us."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()
