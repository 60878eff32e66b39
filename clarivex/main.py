from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from clarivex.api.deps import get_session_store
from clarivex.api.routers import auth, billing, me, pages
from clarivex.application.use_cases.auth_common import utcnow
from clarivex.domain.exceptions import UnauthenticatedAccessError
from clarivex.infrastructure.db.engine import get_engine, init_db
from clarivex.shared.config import Settings, get_settings


logger = logging.getLogger(__name__)

SESSION_PURGE_INTERVAL_SECONDS = 10 * 60


async def _purge_sessions_forever() -> None:
    store = get_session_store()
    while True:
        await asyncio.sleep(SESSION_PURGE_INTERVAL_SECONDS)
        store.purge_expired(now=utcnow())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(get_engine(settings.database_url))
    purge_task = asyncio.create_task(_purge_sessions_forever())
    logger.info("main: started site_url=%s", settings.site_url)
    try:
        yield
    finally:
        purge_task.cancel()
        with suppress(asyncio.CancelledError):
            await purge_task


async def _redirect_to_login(request: Request, exc: UnauthenticatedAccessError):
    logger.info("main: unauthenticated path=%s reason=%s", request.url.path, exc)
    return RedirectResponse(auth.LOGIN_PATH, status_code=302)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title="Clarivex", lifespan=lifespan)
    app.add_exception_handler(UnauthenticatedAccessError, _redirect_to_login)

    app.include_router(auth.router)
    app.include_router(me.router)
    app.include_router(billing.router)
    app.include_router(pages.router)
    # Mounted last so the guarded page routes above win.
    app.mount("/", StaticFiles(directory=settings.public_dir), name="public")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "clarivex.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
