"""
This module creates and configures the FastAPI application for the Elpris
Beregner API: Danish consumer electricity price composition, network tariff
lookup and provider comparison.

API Categories:
    - System Information: health and API metadata
    - Price Calculation: price per kWh, breakdown, monthly cost
    - Network Tariffs: live DatahubPricelist tariffs with static fallback
    - Spot Prices: day-ahead prices per price area
    - Provider Comparison: ranked provider table
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .controllers import ElprisController
from .config import app_config


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if app_config.is_debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application with CORS and all routes under /api.

    Routes:
        - /docs: Interactive Swagger UI documentation
        - /redoc: Alternative ReDoc documentation
        - /api/*: All price, tariff and provider endpoints
    """
    app = FastAPI(
        title=app_config.api.title,
        description=app_config.api.description,
        version=app_config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health and version info"
            },
            {
                "name": "Price Calculation",
                "description": "Consumer price per kWh incl. VAT, breakdowns and cost projections"
            },
            {
                "name": "Network Tariffs",
                "description": "Grid operator tariffs from DatahubPricelist with static fallback"
            },
            {
                "name": "Spot Prices",
                "description": "Day-ahead spot prices from Elspotprices"
            },
            {
                "name": "Provider Comparison",
                "description": "Providers ranked by monthly cost"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.api.allow_origins,
        allow_credentials=app_config.api.allow_credentials,
        allow_methods=app_config.api.allow_methods,
        allow_headers=app_config.api.allow_headers,
    )

    app.include_router(
        ElprisController().router,
        prefix="/api",
    )

    return app


configure_logging()

# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=app_config.api.host,
        port=app_config.api.port,
        reload=app_config.api.reload
    )
