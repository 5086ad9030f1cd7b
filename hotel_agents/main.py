"""
FastAPI application entry point.

Assembles the FastAPI app with the hotel search and catalog routers.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_agents.catalog.catalog_api import router as catalog_router
from hotel_agents.graph.hotel_search_api import router as hotel_search_router
from hotel_agents.shared.logging.config import setup_logging


# ============================================================================
# Logging configuration (single source of truth for all agents)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

# Turn start/end summaries as JSON lines
setup_logging(stream=sys.stdout)


app = FastAPI(
    title="Hotel Agents",
    description="Conversational hotel search built with LangGraph",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(hotel_search_router)
app.include_router(catalog_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Hotel Agents",
        "version": "0.1.0",
        "agents": {
            "hotel_search": {
                "status": "active (mock providers)",
                "endpoints": "/api/hotel-search",
            },
            "catalog": {
                "status": "active",
                "endpoints": "/api/catalog",
            },
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
