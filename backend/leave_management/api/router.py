from fastapi import APIRouter

from leave_management.api.approvals import approvals_router
from leave_management.api.batch import batch_router
from leave_management.api.employees import employees_router
from leave_management.api.leave_types import leave_types_router
from leave_management.api.managers import managers_router
from leave_management.api.reports import reports_router
from leave_management.api.requests import requests_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(leave_types_router)
api_router.include_router(managers_router)
api_router.include_router(requests_router)
api_router.include_router(approvals_router)
api_router.include_router(batch_router)
api_router.include_router(reports_router)
