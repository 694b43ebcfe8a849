from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from socialfeed.core.config import Settings, get_settings
from socialfeed.core.errors import register_exception_handlers
from socialfeed.core.storage import MediaStorage
from socialfeed.db.init_db import create_all_tables
from socialfeed.db.session import create_db_engine, create_session_factory
from socialfeed.middleware.request_logging import RequestLoggingMiddleware
from socialfeed.middleware.auth_logging import AuthLoggingMiddleware
from socialfeed.modules.auth.api.router import router as auth_router
from socialfeed.modules.user_management.api.router import router as user_router
from socialfeed.modules.posts.api.router import router as posts_router
from socialfeed.modules.posts.comments.api.router import router as comments_router
from socialfeed.modules.posts.reactions.api.router import router as reactions_router
from socialfeed.modules.home_feed.api.router import router as home_feed_router

logger = logging.getLogger("app")


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. Everything process-wide (settings, database engine,
    session factory, media storage) is created here once and kept on app.state.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    engine = create_db_engine(settings)
    storage = MediaStorage(settings)
    storage.ensure_directory()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
        create_all_tables(engine)
        yield
        engine.dispose()

    app = FastAPI(
        lifespan=lifespan,
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        description="Social feed: posts, comments and reactions",
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.storage = storage

    register_exception_handlers(app)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(AuthLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = settings.API_PREFIX
    app.include_router(auth_router, prefix=prefix, tags=["authentication"])
    app.include_router(user_router, prefix=prefix, tags=["users"])
    app.include_router(home_feed_router, prefix=prefix, tags=["feed"])
    app.include_router(posts_router, prefix=prefix, tags=["posts"])
    app.include_router(comments_router, prefix=f"{prefix}/posts/{{post_id}}/comments", tags=["comments"])
    app.include_router(reactions_router, prefix=f"{prefix}/posts/{{post_id}}/reaction", tags=["reactions"])

    # Stored records hold bare filenames; this mount is where they are served from
    app.mount(settings.MEDIA_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIRECTORY), name="media")

    @app.get("/")
    def root():
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app

