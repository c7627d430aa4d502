from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from quild.core.config import settings
from quild.core.exceptions import ProviderUnavailableError
from quild.core.logging import configure_logging
from quild.endpoints import catalog, progress, lesson, leaderboard, users, course, webhooks, seed
from quild.middleware.exceptions import (
    database_exception_handler,
    global_exception_handler,
    http_exception_handler,
    provider_unavailable_handler,
    validation_exception_handler,
)
from quild.middleware.logging import RequestLoggingMiddleware

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(ProviderUnavailableError, provider_unavailable_handler)

app.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
app.include_router(progress.router, prefix="/progress", tags=["Progress"])
app.include_router(lesson.router, prefix="/lesson", tags=["Lessons"])
app.include_router(leaderboard.router, prefix="/leaderboard", tags=["Leaderboard"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(course.router, prefix="/courses", tags=["Courses"])
app.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])
app.include_router(seed.router, prefix="/seed", tags=["Seed"])

@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "ok", "version": settings.VERSION}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
