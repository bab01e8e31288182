from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..models.auth import TokenClaims
from .exceptions import AuthenticationError
from .security import TokenService

# auto_error=False → we answer 401 ourselves (HTTPBearer would say 403)
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def require_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Gate for protected routes: a valid `Authorization: Bearer <jwt>` or 401.
    The verified claims are returned so handlers can authorise on them.
    """
    if creds is None or not creds.credentials:
        raise AuthenticationError("Not authenticated")
    claims = tokens.verify(creds.credentials)
    if claims is None:
        raise AuthenticationError()
    return claims
