from typing import AsyncIterator

from fastapi import Request

from ..services.credentials import CredentialVerifier
from ..services.users import UserStore


async def get_store(request: Request) -> AsyncIterator[UserStore]:
    """One session per request; anything left uncommitted is rolled back on exit."""
    async with request.app.state.sessionmaker() as session:
        yield UserStore(session)


def get_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.credential_verifier
