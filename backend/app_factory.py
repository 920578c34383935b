"""Application factory and context for the creature evolution API.

The factory avoids import-time side effects: all runtime state lives in an
AppContext attached to ``app.state.context``, so each test can build a
fresh app.

Usage:
    # For production (settings from the environment)
    app = create_app()

    # For testing (small world, fixed seed)
    app = create_app(config=small_config, seed=1)
"""

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.logging_config import configure_logging
from evosim.config.simulation_config import SimulationConfig
from evosim.simulation.manager import GenerationManager

DEFAULT_API_PORT = 8000


def _env_seed() -> Optional[int]:
    raw = os.getenv("EVOSIM_SEED")
    return int(raw) if raw else None


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    config: SimulationConfig = field(default_factory=SimulationConfig)
    seed: Optional[int] = field(default_factory=_env_seed)
    manager: Optional[GenerationManager] = None
    api_port: int = field(
        default_factory=lambda: int(os.getenv("EVOSIM_API_PORT", str(DEFAULT_API_PORT)))
    )
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("evosim.backend"))

    def __post_init__(self) -> None:
        if self.manager is None:
            self.manager = GenerationManager(self.config, seed=self.seed)

    def reset(
        self,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None,
        seed: Optional[int] = None,
    ) -> GenerationManager:
        """Replace the manager with a fresh one.

        Raises:
            ConfigurationError: If the overrides are invalid (the current
                manager is kept)
        """
        config = SimulationConfig.from_dict(overrides, base=self.config)
        manager = GenerationManager(config, seed=seed)
        self.config = config
        self.seed = seed
        self.manager = manager
        self.logger.info("Simulation reset (seed=%s)", seed)
        return manager


def create_app(
    *,
    config: Optional[SimulationConfig] = None,
    seed: Optional[int] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Simulation configuration for the initial manager
        seed: Seed for the initial manager (default: EVOSIM_SEED env var)
        context: Pre-configured AppContext (for testing)

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging()

    if context is None:
        kwargs: Dict[str, Any] = {}
        if config is not None:
            kwargs["config"] = config
        if seed is not None:
            kwargs["seed"] = seed
        context = AppContext(**kwargs)
    context.logger = logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown."""
        ctx = app.state.context
        ctx.logger.info(
            "LIFESPAN: Simulation ready (generation %d, %d creatures)",
            ctx.manager.generation,
            len(ctx.manager.creatures),
        )
        yield
        ctx.logger.info("LIFESPAN: Received shutdown signal")

    app = FastAPI(title="Creature Evolution API", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    _setup_routers(app, context)
    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Setup and include all API routers."""
    from backend.routers.simulation import setup_simulation_router

    @app.get("/health")
    async def health():
        return {"status": "ok", "state": ctx.manager.state.value}

    app.include_router(setup_simulation_router(ctx))
