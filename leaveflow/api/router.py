from fastapi import APIRouter

from leaveflow.api.applications import applications_router
from leaveflow.api.balances import balance_router, employee_balance_router
from leaveflow.api.employees import employees_router
from leaveflow.api.leave_types import leave_types_router

api_router = APIRouter()
api_router.include_router(leave_types_router)
api_router.include_router(applications_router)
api_router.include_router(employee_balance_router)
api_router.include_router(balance_router)
api_router.include_router(employees_router)
