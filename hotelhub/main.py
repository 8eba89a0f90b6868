import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from hotelhub.db.init_db import create_database
from hotelhub.db.base import Base
from hotelhub.db.session import engine, SessionLocal
from hotelhub.core.config import settings
from hotelhub.core.errors import HotelHubError
from hotelhub.api.v1.router import api_router

logger = logging.getLogger(__name__)


async def _hold_sweep_loop() -> None:
    """Background task: cancel pending bookings whose hold has expired."""
    from hotelhub.services.availability import expire_holds

    while True:
        try:
            db = SessionLocal()
            try:
                expire_holds(db)
            finally:
                db.close()
        except Exception:
            logger.exception("Error during expired-hold sweep.")
        await asyncio.sleep(settings.HOLD_SWEEP_INTERVAL_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    Base.metadata.create_all(bind=engine)

    sweep_task = None
    if settings.HOLD_SWEEP_ENABLED:
        sweep_task = asyncio.create_task(_hold_sweep_loop())
    yield

    # Shutdown: cancel background task
    if sweep_task is not None:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HotelHubError)
async def hotelhub_error_handler(request: Request, exc: HotelHubError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": settings.PROJECT_NAME}
