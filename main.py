from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.logging import setup_logging
from app.apis.catalog.main import router as catalog_router
from app.apis.wizard.main import router as wizard_router
from app.apis.lessons.main import router as lessons_router
from app.apis.quiz.main import router as quiz_router

import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from app.modules.wizard.state import wizard_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    wizard_manager.start(
        idle_seconds=settings.sessions.idle_seconds,
        sweep_interval=settings.sessions.sweep_interval,
    )
    try:
        yield
    finally:
        await wizard_manager.stop()


def create_app() -> FastAPI:
    setup_logging(settings.app.log_level)
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(catalog_router)
    app.include_router(wizard_router)
    app.include_router(lessons_router)
    app.include_router(quiz_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
