"""API routes."""

from fastapi import APIRouter

from dashboard.api import auth, records, users

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(records.router, prefix="/records", tags=["records"])
router.include_router(users.router, prefix="/users", tags=["users"])
