"""
Login credential check.

The demo service keeps no password material, so the default verifier
accepts any password for an existing account.  Deployments that need real
credentials provide their own `CredentialVerifier` to `create_app()`; the
login route and everything behind it stay the same.
"""
from typing import Protocol

from .users import UserStore


class CredentialVerifier(Protocol):
    async def verify_credential(self, store: UserStore, email: str, password: str) -> bool: ...


class AcceptAnyPassword:
    """Demo-only: the account must exist, the password is ignored."""

    async def verify_credential(self, store: UserStore, email: str, password: str) -> bool:
        return await store.get_by_email(email) is not None
