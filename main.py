"""
Main entrypoint for the FastAPI server
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy import text
from core.lifespan import lifespan
from core.config import get_settings
from core.deps import SessionDep
from core.logger import logger
from core.models import ErrorResponse

from api.files.exceptions import ErrorKind, FileServiceError
from api.files.routes import router as files_router


# Customize route id's
# Helpful for creating sensible names in the client
def custom_generate_unique_id(route: APIRoute):
    """ Generate unique route IDs based on route name """
    return f"{route.name}"  # these must be unique


# Create schema & router
app = FastAPI(
    lifespan=lifespan,
    generate_unique_id_function=custom_generate_unique_id
)


def get_cors_origins(client_origin: str | None) -> list[str]:
    """ Split a comma separated client_origin setting into origins """
    if not client_origin:
        return []
    return [origin.strip() for origin in client_origin.split(",") if origin.strip()]


# CORS settings to allow client-server communication
# Set with env variable
origins = get_cors_origins(get_settings().client_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Status code and title returned for each storage error kind
ERROR_RESPONSES = {
    ErrorKind.VALIDATION: (status.HTTP_400_BAD_REQUEST, "Invalid Request"),
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "File Not Found"),
    ErrorKind.STORAGE: (status.HTTP_500_INTERNAL_SERVER_ERROR, "File Storage Error"),
}


@app.exception_handler(FileServiceError)
async def file_service_error_handler(request: Request, exc: FileServiceError):
    status_code, title = ERROR_RESPONSES[exc.kind]
    if exc.kind == ErrorKind.STORAGE:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=title, details=exc.message).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message="Internal Server Error", details=str(exc)).model_dump(),
    )


# REST routers
# Add each api/feature folder here
API_PREFIX = "/api"

app.include_router(files_router, prefix=API_PREFIX)


# Health check endpoint for monitoring
@app.get("/api/health", tags=["health"])
def health_check(session: SessionDep):
    session.connection().execute(text("SELECT 1"))
    return {"status": "ok", "message": "Course content API is running"}


if __name__ == "__main__":
    # For debugging purposes
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
