from fastapi import FastAPI

from marketplace_ads.entrypoints.http.exception_handlers import register_exception_handlers
from marketplace_ads.entrypoints.http.routes.ads import router as ads_router
from marketplace_ads.entrypoints.http.routes.health import router as health_router
from marketplace_ads.entrypoints.http.routes.maintenance import router as maintenance_router
from marketplace_ads.infra.logging_config import configure_logging


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Marketplace Ads API",
        description="""
        Classifieds ads for properties, private vehicles, commercial vehicles
        and two-wheelers.

        ## Features
        - Search ads with category-aware filters, sorting and pagination
        - Create, update and delete ads (base record plus category details)
        - Cache warm-up and data consistency maintenance

        ## Authentication
        Handled upstream. The caller identity arrives in the `X-User-Id`
        and `X-User-Role` headers.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(ads_router, prefix="/v1")
    app.include_router(maintenance_router, prefix="/v1")

    return app


app = build_app()
