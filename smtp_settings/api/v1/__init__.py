"""API v1 router aggregator."""

from fastapi import APIRouter

from smtp_settings.api.v1 import smtp_settings

api_router = APIRouter(tags=["API v1"])

api_router.include_router(smtp_settings.router)
