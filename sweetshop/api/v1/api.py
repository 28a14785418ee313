from fastapi import APIRouter
from sweetshop.api.v1.endpoints import auth, sweets

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(sweets.router, prefix="/sweets", tags=["sweets"])
