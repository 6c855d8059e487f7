"""
mediadrop - upload, transcode and share media through object storage
Main FastAPI application entry point
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from mediadrop.api.errors import error_response
from mediadrop.api.v1.router import api_router
from mediadrop.core.config import settings
from mediadrop.core.errors import InvalidRequestError
from mediadrop.core.logging import configure_logging

configure_logging(settings.log_level)

app = FastAPI(
    title="mediadrop",
    description="Upload media, transcode video for the web, share links from object storage",
    version="0.1.0",
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

CROSS_ORIGIN_ISOLATION_HEADERS = {
    "Cross-Origin-Embedder-Policy": "require-corp",
    "Cross-Origin-Opener-Policy": "same-origin",
}


@app.middleware("http")
async def cross_origin_isolation(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CROSS_ORIGIN_ISOLATION_HEADERS)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # submitted values stay out of both the response and the log
    fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
    return error_response(InvalidRequestError(f"invalid fields: {fields}"), f"{request.method} {request.url.path}")


# Include API router
app.include_router(api_router, prefix="/api/v1")

@app.get("/")
async def root():
    return {"message": "Welcome to mediadrop"}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "mediadrop"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
