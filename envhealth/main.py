"""FastAPI application setup for the environmental health dashboard."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Environmental Health Dashboard")


@app.get("/")
def service_info():
    """Report the service name and liveness."""
    return {"service": app.title, "status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
