import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from relay.api.routes.rooms import rooms_router
from relay.application.room_registry import RoomRegistry
from relay.config import Config
from relay.env import load_env_file

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def app_factory(config: Config | None = None) -> FastAPI:
    config = config or Config.load()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.config = config
        app.state.room_registry = RoomRegistry(config.registry)
        try:
            yield
        finally:
            await app.state.room_registry.close()

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(rooms_router)

    return app


load_env_file()
CONFIG = Config.load()
configure_logging(CONFIG.log_level)

app = app_factory(CONFIG)


def run() -> None:
    logger.info("starting relay on %s:%s", CONFIG.server.host, CONFIG.server.port)
    uvicorn.run(
        app,
        host=CONFIG.server.host,
        port=CONFIG.server.port,
        log_level=CONFIG.log_level.lower(),
    )


if __name__ == "__main__":
    run()
