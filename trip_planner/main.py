"""
FastAPI application entry point.

Assembles the FastAPI app with the planner router.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trip_planner.api.planner_api import router as planner_router
from trip_planner.shared.logging.config import configure_logging


# Logging configuration (single source of truth for the app)
configure_logging()


app = FastAPI(
    title="Trip Planner",
    description="Resilient AI route planning with a deterministic fallback",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planner_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Trip Planner",
        "version": "0.1.0",
        "endpoints": {
            "plan": "/api/planner/plan",
            "locations": "/api/planner/locations",
            "accept": "/api/planner/accept",
            "tours": "/api/planner/tours",
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
