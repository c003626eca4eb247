from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from leave_management.db import SessionDep
from leave_management.repositories import Repositories, SqlRepositories


async def get_repositories(session: SessionDep) -> Repositories:
    """Bind the entity repositories to the request's database session."""
    return SqlRepositories(session)


RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]
