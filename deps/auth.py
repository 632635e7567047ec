import os
from typing import Annotated

from fastapi import Header, HTTPException

# Tokens are read per request so deployments (and tests) can rotate them without a restart.


def _admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "")


def _api_key() -> str:
    return os.getenv("FLIPPER_API_KEY", "")


def require_admin(
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Strict admin-only guard. Requires the X-Admin-Token header to match ADMIN_TOKEN.
    """
    expected = _admin_token()
    if not expected:
        raise HTTPException(status_code=500, detail="ADMIN_TOKEN not configured on server.")
    if x_admin_token != expected:
        raise HTTPException(status_code=401, detail="Unauthorized.")


def require_client(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Client/API guard. Accepts either:
      - X-Admin-Token that matches ADMIN_TOKEN (admins always allowed), or
      - X-Api-Key that matches FLIPPER_API_KEY.
    """
    admin = _admin_token()
    if admin and x_admin_token == admin:
        return

    api_key = _api_key()
    if not api_key:
        raise HTTPException(status_code=500, detail="FLIPPER_API_KEY not configured on server.")
    if x_api_key != api_key:
        raise HTTPException(status_code=401, detail="Unauthorized.")
