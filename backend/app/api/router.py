"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import orders, reports, fees, analytics

api_router = APIRouter()

# Include all route modules
api_router.include_router(orders.router)
api_router.include_router(reports.router)
api_router.include_router(fees.router)
api_router.include_router(analytics.router)
