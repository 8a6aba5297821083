"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripsplit.api.routes import settlements

api_router = APIRouter()

# Include all route modules
api_router.include_router(settlements.router)
