"""
OAuth authorization code exchange endpoint.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.post("/oauth/token")
async def oauth_token(request: Request):
    """Exchange an authorization code for tokens plus the user's profile

    Errors are raised as ServiceError and rendered by the app's handlers.
    """
    raw_body = await request.body()
    referral_code = request.headers.get("x-referral-code")
    payload = await request.app.state.token_handler.handle(raw_body, referral_code)
    return JSONResponse(payload)
