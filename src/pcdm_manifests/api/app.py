from __future__ import annotations

from fastapi import FastAPI

from pcdm_manifests import __version__
from pcdm_manifests.api.errors import register_error_handlers
from pcdm_manifests.api.lifespan import lifespan
from pcdm_manifests.api.middleware import AllowAnyOriginMiddleware
from pcdm_manifests.api.routes.health import router as health_router
from pcdm_manifests.api.routes.manifests import router as manifests_router
from pcdm_manifests.api.routes.root import router as root_router


def create_app() -> FastAPI:
    app = FastAPI(
        title="PCDM Manifests",
        description="IIIF Presentation manifests and annotation lists for repository objects.",
        version=__version__,
        lifespan=lifespan,
    )

    register_error_handlers(app)
    app.add_middleware(AllowAnyOriginMiddleware)

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(manifests_router)

    return app
