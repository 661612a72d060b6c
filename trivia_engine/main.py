import uvicorn
from fastapi import FastAPI

from trivia_engine.api.routes.categories import router as categories_router
from trivia_engine.api.routes.games import router as games_router
from trivia_engine.api.routes.health import router as health_router
from trivia_engine.api.routes.players import router as players_router
from trivia_engine.api.routes.sessions import router as sessions_router
from trivia_engine.core.config import get_settings
from trivia_engine.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.app_env != "dev")

    app = FastAPI(
        title="Trivia Engine API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.include_router(health_router)
    app.include_router(categories_router)
    app.include_router(games_router)
    app.include_router(sessions_router)
    app.include_router(players_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "trivia_engine.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
