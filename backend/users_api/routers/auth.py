# backend/users_api/routers/auth.py
#
#   • POST /login – JSON {email, password} → {token}
#
# The password check is delegated to the CredentialVerifier on app.state
# (services/credentials.py); the demo verifier only requires that the
# account exists.

import logging

from fastapi import APIRouter, Depends

from ..core.auth import get_token_service
from ..core.exceptions import AuthenticationError
from ..core.security import TokenService
from ..core.validation import normalize_email
from ..models.auth import LoginRequest, TokenResponse
from ..services.credentials import CredentialVerifier
from ..services.users import UserStore
from .deps import get_store, get_verifier

log = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post("/login", response_model=TokenResponse, summary="Exchange e-mail + password for a bearer token")
async def login(
    payload: LoginRequest,
    store: UserStore = Depends(get_store),
    verifier: CredentialVerifier = Depends(get_verifier),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    email = normalize_email(payload.email)
    if not await verifier.verify_credential(store, email, payload.password):
        log.info("Rejected login for %s", email)
        raise AuthenticationError("Invalid email or password")

    return TokenResponse(token=tokens.issue(email))
