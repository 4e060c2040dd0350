# hirefusion/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import settings
from .database import dispose_engine, get_db, init_db
from .errors import register_error_handlers
from .routes import accounts, alerts, jobs, notifications, profile, saved_jobs

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one engine per process, created here and released on shutdown
    init_db()
    yield
    dispose_engine()


app = FastAPI(title="HireFusion API", debug=settings.DEBUG, lifespan=lifespan)
register_error_handlers(app)

app.include_router(accounts.router)
app.include_router(jobs.router)
app.include_router(saved_jobs.router)
app.include_router(notifications.router)
app.include_router(profile.router)
app.include_router(alerts.router)


@app.get("/health", tags=["monitoring"])
def health_check(db: Session = Depends(get_db)):
    """
    Checks if the application is healthy, including the database connection.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "ok"}
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database connection error"
        )
