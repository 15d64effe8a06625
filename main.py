"""
Artifact Lens - FastAPI application for chatting about artworks and artifacts.
Grounds a hosted vision model with similar-artifact context and streams its commentary back.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from config import Config
from routes import chat, chat_stream, image_search
from auth import APIKeyMiddleware
from utils.exceptions import BridgeError
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    yield
    await HTTPClientManager.close_all()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with user-friendly messages"""
    errors = exc.errors()
    app_logger.error(f"Validation error for {request.url}")
    app_logger.debug(f"Errors: {errors}")

    if errors:
        first_error = errors[0]
        error_type = first_error.get('type', '')
        loc = first_error.get('loc', [])
        field = loc[-1] if loc else 'field'
        message = f"{field}: {first_error.get('msg', 'Validation error')}"

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": [{
                    "msg": message,
                    "type": error_type,
                    "loc": list(loc)
                }]
            },
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation error"},
    )


async def bridge_error_handler(request: Request, exc: BridgeError):
    """Report proxy-layer failures that happen before streaming starts."""
    app_logger.error(f"{type(exc).__name__} for {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(APIKeyMiddleware)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(BridgeError, bridge_error_handler)


#root endpoint
@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"message": "Artifact Lens server is running"}

app.include_router(chat.router, tags=["chat"])
app.include_router(chat_stream.router, tags=["chat"])
app.include_router(image_search.router, tags=["search"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
