from __future__ import annotations

from typing import TYPE_CHECKING

from leave_management.exceptions import ConflictError, NotFoundError
from leave_management.schemas.manager import ManagerListResponse, ManagerResponse
from leave_management.services.validation import validate_manager_create, validate_manager_update

if TYPE_CHECKING:
    import uuid

    from leave_management.models import Manager
    from leave_management.repositories import Repositories
    from leave_management.schemas.manager import CreateManagerRequest, UpdateManagerRequest


def build_manager_response(manager: Manager) -> ManagerResponse:
    return ManagerResponse(
        id=manager.id,
        name=manager.name,
        email=manager.email,
        created_at=manager.created_at,
    )


async def _get_manager_or_404(repos: Repositories, manager_id: uuid.UUID) -> Manager:
    manager = await repos.managers.get(manager_id)
    if manager is None:
        raise NotFoundError("Manager not found")
    return manager


async def create_manager(repos: Repositories, payload: CreateManagerRequest) -> ManagerResponse:
    manager = await validate_manager_create(repos, payload)
    await repos.managers.add(manager)
    await repos.commit()
    return build_manager_response(manager)


async def update_manager(
    repos: Repositories,
    manager_id: uuid.UUID,
    payload: UpdateManagerRequest,
) -> ManagerResponse:
    """Update a manager. Approvals keep the name recorded at decision time."""
    manager = await _get_manager_or_404(repos, manager_id)
    changes = await validate_manager_update(repos, manager, payload)
    for field, value in changes.items():
        setattr(manager, field, value)
    await repos.commit()
    return build_manager_response(manager)


async def delete_manager(repos: Repositories, manager_id: uuid.UUID) -> None:
    """Delete a manager with no employees assigned."""
    manager = await _get_manager_or_404(repos, manager_id)
    if await repos.employees.count_for_manager(manager.id) > 0:
        raise ConflictError(f"Manager {manager.name} still manages employees and cannot be deleted")
    await repos.managers.delete(manager)
    await repos.commit()


async def get_manager(repos: Repositories, manager_id: uuid.UUID) -> ManagerResponse:
    return build_manager_response(await _get_manager_or_404(repos, manager_id))


async def list_managers(repos: Repositories, search: str | None = None) -> ManagerListResponse:
    managers = await repos.managers.list(search=search)
    return ManagerListResponse(items=[build_manager_response(m) for m in managers], total=len(managers))
