from fastapi import APIRouter

from .medication_routes import router as medication_router

# Versioned API router - prefix is added in main.py, do NOT add prefix here
router = APIRouter()

router.include_router(medication_router)
