# api/state.py
from __future__ import annotations
from fastapi import Request

from reports import ReportComposer
from .services.finance import FinanceService


# Resolved once in fastapi_app.py and stored on app.state; routes receive them via Depends.
def get_composer(request: Request) -> ReportComposer:
    return request.app.state.composer


def get_finance(request: Request) -> FinanceService:
    return request.app.state.finance
