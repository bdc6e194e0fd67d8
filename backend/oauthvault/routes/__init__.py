# oauthvault/routes/__init__.py
from fastapi import APIRouter
from .public import router as public_router
from .system import router as system_router

router = APIRouter()
router.include_router(public_router)
router.include_router(system_router)
