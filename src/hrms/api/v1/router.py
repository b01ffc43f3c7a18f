from fastapi import APIRouter

from src.hrms.api.v1 import companies

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(companies.router)
