from fastapi import FastAPI

from fxgate.api.run_routes import router as run_router
from fxgate.core.config import settings
from fxgate.core.logging import setup_logging

setup_logging()

tags_metadata = [
    {
        "name": "runs",
        "description": "Run FxCop against compiled assemblies and turn its report into a pass/fail decision.",
    },
    {
        "name": "health",
        "description": "Liveness probe for load balancers and build agents.",
    },
]

app = FastAPI(
    title="FxCop Gate",
    version=settings.APP_VERSION,
    description="Invokes FxCop on .NET assemblies and classifies the issues it reports.",
    openapi_tags=tags_metadata,
)

app.include_router(run_router)


@app.get("/health", tags=["health"], summary="Health check")
def health() -> dict[str, str]:
    return {"status": "healthy", "version": settings.APP_VERSION}
