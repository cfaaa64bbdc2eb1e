"""API routers."""

from fastapi import APIRouter

from . import applications, dashboard, reminders, system

api_router = APIRouter()
api_router.include_router(system.router)
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(applications.router, prefix="/applications", tags=["applications"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
