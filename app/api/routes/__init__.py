"""API routes."""

from fastapi import APIRouter

from app.api.routes import auth, calculator, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(calculator.router, prefix="/calculator", tags=["calculator"])
