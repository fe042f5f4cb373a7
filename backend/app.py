import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend.balance import init_balance
from backend.routes import router

load_dotenv(Path(__file__).parent.parent / ".env")


def create_app(balance_path: Path | None = None) -> FastAPI:
    resolved = balance_path
    if resolved is None and os.getenv("BALANCE_FILE"):
        resolved = Path(os.environ["BALANCE_FILE"])
    init_balance(resolved)

    app = FastAPI(title="Side Effects")
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses BALANCE_FILE env var or defaults)
app = create_app()
