"""
reqstore.runtime  ──  FastAPI host around a RecordStore.

The host plays the collaborators the store relies on: it authenticates
the caller (bearer token -> OwnerGrant), reads the clock, and dispatches
the single `update` command.

Usage pattern
-------------
    from reqstore.runtime import BearerAuthenticator, create_app
    from reqstore.bootstrap import store_from_url

    app = create_app(
        store_from_url("sqlite:///reqstore.db"),
        BearerAuthenticator({"secret-token": 42}),
    )
"""

from __future__ import annotations

import logging
import time
from typing import Annotated, Any, Callable, Mapping, Optional

from fastapi import Depends, FastAPI, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .bootstrap import store_from_url
from .config import Settings
from .core.auth import OwnerGrant
from .core.record import UINT64_MAX, ServiceRequest, UInt64
from .errors import StorageExhausted, Unauthorized
from .logging_config import setup_logging
from .persistence.store import RecordStore

log = logging.getLogger(__name__)

Key = Annotated[int, Path(ge=0, le=UINT64_MAX)]


def epoch_seconds() -> int:
    return int(time.time())


class BearerAuthenticator:
    """Static bearer token -> owner map."""

    def __init__(self, tokens: Mapping[str, int]):
        self._tokens = dict(tokens)

    def authenticate(self, token: Optional[str]) -> Optional[OwnerGrant]:
        owner = self._tokens.get(token) if token else None
        return None if owner is None else OwnerGrant(owner=owner)


class UpdateIn(BaseModel):
    owner: UInt64
    title: str = ""
    description: str = ""
    time: str = ""


def create_app(
    store: RecordStore,
    authenticator: BearerAuthenticator,
    *,
    clock: Callable[[], int] = epoch_seconds,
    **fastapi_kwargs: Any,
) -> FastAPI:
    """Build the HTTP host; `store` is shared by every request."""
    app = FastAPI(**fastapi_kwargs)
    app.state.store = store
    bearer = HTTPBearer(auto_error=False)

    @app.exception_handler(Unauthorized)
    async def unauthorized(request: Request, exc: Unauthorized) -> JSONResponse:
        log.warning("Rejected update for owner %s", exc.owner)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
        )

    @app.exception_handler(StorageExhausted)
    async def exhausted(request: Request, exc: StorageExhausted) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_507_INSUFFICIENT_STORAGE,
            content={"detail": str(exc)},
        )

    @app.get("/")
    def health() -> dict[str, str]:
        return {"status": "running"}

    @app.post("/update", response_model=ServiceRequest)
    def update(
        payload: UpdateIn,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    ) -> ServiceRequest:
        grant = authenticator.authenticate(
            credentials.credentials if credentials else None
        )
        return store.submit_or_update(
            payload.owner,
            payload.title,
            payload.description,
            payload.time,
            clock(),
            grant=grant,
        )

    @app.get("/requests/by-owner/{owner}", response_model=ServiceRequest)
    def by_owner(owner: Key) -> ServiceRequest:
        found = store.get_by_owner(owner)
        if found is None:
            raise HTTPException(status_code=404, detail=f"no request for owner {owner}")
        return found

    @app.get("/requests/{primary_key}", response_model=ServiceRequest)
    def by_key(primary_key: Key) -> ServiceRequest:
        found = store.get(primary_key)
        if found is None:
            raise HTTPException(status_code=404, detail=f"request {primary_key} not found")
        return found

    return app


def app_from_settings(settings: Optional[Settings] = None, **fastapi_kwargs: Any) -> FastAPI:
    """One-liner for deployments: logging, store and auth from the environment."""
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_file)
    store = store_from_url(settings.database_url)
    log.info("Serving requests from %s", store.engine.url)
    return create_app(
        store, BearerAuthenticator(settings.owner_tokens()), **fastapi_kwargs
    )
