"""
Main FastAPI application for the Drug Development Research Explorer.

Architecture:
- Search API (api/search.py): page rendering and JSON search
- Fetching (fetching/): QueryBuilder -> PubMedProvider -> RecordParser
- Presentation (presentation/): display formatting and templates
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from explorer.api.search import router as search_router
from explorer.config.system_settings import system_settings

logging.basicConfig(
    level=getattr(logging, system_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Drug Development Research Explorer",
    description="Search PubMed for drug development research papers",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(search_router)


@app.get("/ping")
async def ping():
    """Health check endpoint."""
    return {"message": "pong"}


if __name__ == "__main__":
    from uvicorn import run

    run("explorer.main:app", host="localhost", port=8000, reload=True)
