"""
API v1 routes.
"""

from fastapi import APIRouter

from techtales.api.v1 import articles, auth, navigation

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(articles.router, tags=["Articles"])
router.include_router(navigation.router, tags=["Navigation"])
