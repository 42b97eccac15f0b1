# api/__init__.py
from typing import List
from fastapi import APIRouter

def get_routers() -> List[APIRouter]:
    from .routes.reports import router as reports_router
    return [reports_router]
