from typing import Any, Dict

from fastapi import APIRouter, Body, Response

from skillup import config
from skillup.auth.auth_utils import cookie_options, create_access_token

router = APIRouter(tags=["Auth"])


@router.post("/jwt")
async def issue_token(response: Response, user: Dict[str, Any] = Body(...)):
    """
    Sign the posted user payload and set it as the http-only `token` cookie
    """
    token = create_access_token(user)
    response.set_cookie(
        key=config.TOKEN_COOKIE_NAME,
        value=token,
        max_age=config.TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        **cookie_options()
    )
    return {"success": True}


@router.get("/logout")
async def logout(response: Response):
    response.delete_cookie(key=config.TOKEN_COOKIE_NAME, **cookie_options())
    return {"success": True}
