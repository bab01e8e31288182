import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from pydantic import ValidationError

from ..models.auth import TokenClaims
from .config import Settings

ALGORITHM = "HS256"
ROLE = "user"

log = logging.getLogger(__name__)


class TokenService:
    """
    Issues and verifies the signed bearer tokens handed out by POST /login.

    Secret, issuer, audience and lifetime all come from the `Settings`
    instance passed in at startup – nothing is read from the environment
    here.
    """

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._expires = settings.jwt_expires

    def issue(self, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": email,
            "email": email,
            "role": ROLE,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "exp": now + timedelta(seconds=self._expires),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims | None:
        """
        Return the token's claims, or None for *any* failure (bad signature,
        wrong issuer/audience, expired, malformed).  Callers only ever learn
        "invalid"; the reason is logged at DEBUG.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require_exp": True, "require_sub": True, "require_aud": True},
            )
            return TokenClaims(**payload)
        except (JWTError, ValidationError) as exc:
            log.debug("token rejected: %s", exc)
            return None
