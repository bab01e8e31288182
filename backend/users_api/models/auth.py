"""
Login payload, the token handed back by POST /login and the verified
claims that protected routes receive.
"""
from pydantic import BaseModel


class LoginRequest(BaseModel):
    """
    Payload expected by POST /login

    The password is required but never compared against anything – see
    services/credentials.py.
    """
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


class TokenClaims(BaseModel):
    """Verified identity handed to protected handlers."""
    sub: str
    email: str
    role: str
    iss: str
    aud: str
    exp: int
    iat: int | None = None
