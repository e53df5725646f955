import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from villagestay.core.config import get_settings
from villagestay.core.exceptions import BookingError
from villagestay.db.base import Base
from villagestay.db.session import engine
from villagestay.api.routers import (
    auth as auth_router,
    users as users_router,
    homestays as homestays_router,
    bookings as bookings_router,
    reviews as reviews_router,
    content as content_router,
    contact as contact_router,
    admin as admin_router,
    admin_homestays as admin_homestays_router,
    admin_content as admin_content_router,
    upload as upload_router,
)

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.PROJECT_NAME)

# ---------------------------
# CORS
# ---------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Static files
# ---------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
STATIC_DIR = os.path.join(BASE_DIR, "static")

app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


# ---------------------------
# Error handling
# ---------------------------
@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "reason": exc.reason},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---------------------------
# Startup
# ---------------------------
@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------------------------
# Routers
# ---------------------------
app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
app.include_router(users_router.router, prefix="/api/users", tags=["users"])
app.include_router(homestays_router.router, prefix="/api/homestays", tags=["homestays"])
app.include_router(bookings_router.router, prefix="/api/bookings", tags=["bookings"])
app.include_router(reviews_router.router, prefix="/api/reviews", tags=["reviews"])
app.include_router(content_router.router, prefix="/api", tags=["content"])
app.include_router(contact_router.router, prefix="/api/contact", tags=["contact"])

app.include_router(admin_router.router, prefix="/api/admin", tags=["admin"])
app.include_router(admin_homestays_router.router, prefix="/api/admin/homestays", tags=["admin"])
app.include_router(admin_content_router.router, prefix="/api/admin", tags=["admin"])
app.include_router(contact_router.admin_router, prefix="/api/admin", tags=["admin"])
app.include_router(upload_router.router, prefix="/api/upload", tags=["upload"])


# ---------------------------
# Health check
# ---------------------------
@app.get("/ping")
async def ping():
    return {"status": "ok"}


# ---------------------------
# Run
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("villagestay.main:app", host="0.0.0.0", port=8000, reload=True)
