"""
Stub of the not-env configuration service — just `GET /variables`.

For local development and hermetic tests:

    uvicorn "not_env.stub_service:create_app" --factory   # serves no variables

    client = TestClient(create_app([("DB_HOST", "localhost")], api_key="k1"))
    fetch_variables("http://testserver", "k1", client=client)
"""

from __future__ import annotations
import logging
from typing import Iterable, Optional, Tuple, Union

from fastapi import APIRouter, FastAPI, Header
from fastapi.responses import JSONResponse

from not_env.models import RawVariable, VariablesResponse

log = logging.getLogger(__name__)


def _to_raw(item: Union[RawVariable, Tuple[str, str]]) -> RawVariable:
    if isinstance(item, RawVariable):
        return item
    key, value = item
    return RawVariable(key=key, value=value)


def create_app(
    variables: Iterable[Union[RawVariable, Tuple[str, str]]] = (),
    api_key: Optional[str] = None,
) -> FastAPI:
    """Build a stub service answering with *variables*, order and duplicates kept."""
    document = VariablesResponse(variables=[_to_raw(item) for item in variables])
    router = APIRouter(tags=["Variables"])

    @router.get("/variables", response_model=VariablesResponse)
    async def list_variables(authorization: Optional[str] = Header(None)):
        if api_key is not None and authorization != f"Bearer {api_key}":
            log.warning("Rejected /variables request with bad credentials")
            return JSONResponse(
                status_code=401,
                content={"error": "unauthorized", "message": "Invalid or missing API key"},
            )
        return document

    application = FastAPI(
        title="not-env stub",
        description="Serves a fixed variable list in the not-env wire format.",
        version="1.0.0",
    )
    application.include_router(router)
    return application
