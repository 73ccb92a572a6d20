from __future__ import annotations

import logging
import secrets
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from fastapi.responses import RedirectResponse

from storefront.api.deps import (
    get_app_settings,
    get_callback_login_google_use_case,
    get_google_oauth_port,
    get_login_local_use_case,
    get_signup_local_use_case,
)
from storefront.api.schemas.auth import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from storefront.application.dto.auth import LoginGoogleInput, LoginLocalInput, SignupInput
from storefront.application.ports.google_oauth_port import GoogleOauthPort
from storefront.application.use_cases.login_google import LoginGoogleUseCase
from storefront.application.use_cases.login_local import LoginLocalUseCase
from storefront.application.use_cases.signup_local import SignupLocalUseCase
from storefront.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    ValidationError,
)
from storefront.shared.config import Settings


router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Internal server error."


@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(
    req: SignupRequest,
    use_case: SignupLocalUseCase = Depends(get_signup_local_use_case),
):
    try:
        output = use_case.execute(
            SignupInput(
                email=req.email,
                password=req.password,
                name=req.name,
            )
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InfrastructureError as exc:
        logger.error("auth_router: signup failed detail=%s", exc)
        raise HTTPException(status_code=500, detail=GENERIC_FAILURE) from exc

    return SignupResponse(user_id=output.user_id)


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    use_case: LoginLocalUseCase = Depends(get_login_local_use_case),
):
    try:
        output = use_case.execute(LoginLocalInput(email=req.email, password=req.password))
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except InfrastructureError as exc:
        logger.error("auth_router: login failed detail=%s", exc)
        raise HTTPException(status_code=500, detail=GENERIC_FAILURE) from exc

    return LoginResponse(token=output.access_token)


OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE_SECONDS = 600


def _set_state_cookie(response: Response, state: str, *, secure: bool) -> None:
    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        httponly=True,
        samesite="lax",
        secure=secure,
        max_age=OAUTH_STATE_MAX_AGE_SECONDS,
        path="/auth/google",
    )


def _login_failure(settings: Settings) -> RedirectResponse:
    response = RedirectResponse(settings.login_failure_url)
    response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/auth/google")
    return response


@router.get("/google")
def google_authorize(
    settings: Settings = Depends(get_app_settings),
    oauth_port: GoogleOauthPort = Depends(get_google_oauth_port),
):
    state = secrets.token_urlsafe(32)
    response = RedirectResponse(oauth_port.authorization_url(state=state))
    _set_state_cookie(response, state, secure=settings.google_redirect_uri.startswith("https://"))
    return response


@router.get("/google/callback")
def google_callback(
    code: str | None = None,
    error: str | None = None,
    state: str | None = None,
    state_cookie: str | None = Cookie(default=None, alias=OAUTH_STATE_COOKIE),
    settings: Settings = Depends(get_app_settings),
    use_case: LoginGoogleUseCase | None = Depends(get_callback_login_google_use_case),
):
    if error or not code:
        logger.info("auth_router: google callback without code error=%s", error)
        return _login_failure(settings)

    if not state or not state_cookie or not secrets.compare_digest(state.encode(), state_cookie.encode()):
        logger.warning("auth_router: google callback state mismatch")
        return _login_failure(settings)

    if use_case is None:
        return _login_failure(settings)

    try:
        output = use_case.execute(LoginGoogleInput(code=code))
    except DomainError as exc:
        logger.warning("auth_router: google sign-in denied detail=%s", exc)
        return _login_failure(settings)

    query = urlencode({"token": output.access_token})
    response = RedirectResponse(f"{settings.frontend_url}/auth/callback?{query}")
    response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/auth/google")
    return response
