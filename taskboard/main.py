import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.config import Settings, settings as default_settings
from taskboard.core.database import build_engine, build_session_factory, init_schema
from taskboard.routers import health, tasks, subtasks, stats

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings.DATABASE_URL, settings.DB_POOL_SIZE, settings.DB_ECHO)
        # Init DB: pas de mode dégradé, on arrête le process si ça échoue
        try:
            init_schema(engine)
        except SQLAlchemyError:
            logger.exception("Database initialization error")
            engine.dispose()
            raise SystemExit(1)

        app.state.engine = engine
        app.state.SessionLocal = build_session_factory(engine)
        yield

        logger.info("Shutting down, closing database pool")
        engine.dispose()

    app = FastAPI(
        title="Taskboard API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(health.router, prefix="/api")
    app.include_router(tasks.router, prefix="/api")
    app.include_router(subtasks.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")

    return app


app = create_app()


def run():
    import uvicorn

    logging.basicConfig(
        level=default_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
