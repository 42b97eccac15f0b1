from __future__ import annotations

import os
import socket

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import get_routers
from api.config import APP_TITLE, REPORTS_DIR
from api.services.finance import FinanceService
from reports import ReportComposer, StripedTableEngine


def get_ip_address() -> str:
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def create_app(composer: ReportComposer | None = None, finance: FinanceService | None = None) -> FastAPI:
    app = FastAPI(title=APP_TITLE)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # tighten if needed
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Composition root: collaborators are resolved once and shared by every request
    app.state.composer = composer or ReportComposer(REPORTS_DIR, table_engine=StripedTableEngine())
    app.state.finance = finance or FinanceService()

    @app.get("/health")
    async def health():
        return {"ok": True, "app": APP_TITLE}

    # Mount all other routers from api/
    for router in get_routers():
        app.include_router(router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    host_ip = "0.0.0.0"
    port = int(os.getenv("PORT", "5000"))

    print("\n" + "=" * 50)
    print(f"Server is running on:")
    print(f"Local URL:     http://localhost:{port}")
    print(f"Network URL:   http://{get_ip_address()}:{port}")
    print(f"API Docs URL:  http://{get_ip_address()}:{port}/docs")
    print("=" * 50 + "\n")

    uvicorn.run("fastapi_app:app", host=host_ip, port=port, reload=True)
