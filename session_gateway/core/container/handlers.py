"""Session coordinator factory (request-scoped).

The coordinator is rebuilt per request around that request's database
session; everything else it holds is an application-scoped singleton.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from session_gateway.core.container.infrastructure import (
    get_cache,
    get_coordinator_config,
    get_db_session,
    get_logger,
    get_token_generator,
)
from session_gateway.infrastructure.cache import RedisAdapter

if TYPE_CHECKING:
    from session_gateway.application.services import SessionCoordinator


async def get_session_coordinator(
    session: AsyncSession = Depends(get_db_session),
    cache: RedisAdapter = Depends(get_cache),
) -> "SessionCoordinator":
    """Get the session coordinator (request-scoped).

    Returns:
        SessionCoordinator wired to this request's database session.
    """
    from session_gateway.application.services import SessionCoordinator
    from session_gateway.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return SessionCoordinator(
        repository=SessionRepository(session=session),
        cache=cache,
        token_generator=get_token_generator(),
        logger=get_logger(),
        config=get_coordinator_config(),
    )
