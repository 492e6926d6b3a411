"""
╔═══════════════════════════════════════════════════════════════════════════════╗
║                         ROUTERS PACKAGE                                        ║
╠═══════════════════════════════════════════════════════════════════════════════╣
║  health_router               │ /health, /health/db                            ║
║  expansion_readiness_router  │ /api/expansion-readiness,                      ║
║                              │ /api/expansion-readiness/fleet-utilization     ║
╚═══════════════════════════════════════════════════════════════════════════════╝
"""

from .expansion_readiness_router import router as expansion_readiness_router
from .health import router as health_router

__all__ = [
    "expansion_readiness_router",
    "health_router",
    "include_all_routers",
]


def include_all_routers(app):
    """Include all routers in the FastAPI app."""
    app.include_router(health_router)  # /health, /health/db
    app.include_router(expansion_readiness_router)  # /api/expansion-readiness/*
