# =============================================================================
# app/pipeline.py - Pipeline Composer
# =============================================================================
# A route is an ordered chain of stages ending in a controller handler:
#
#   [authenticate?, validate(shape, skip_missing)?, handler]
#
# Stages run strictly in order against one RequestContext. A stage either
# returns None (continue), returns a Response (stop, send it), or raises
# (stop, the error translator answers). Later stages never run once the
# chain has stopped.
#
# The actual route -> stage bindings live in app/routes.py; this module only
# provides the machinery and mounts it on a FastAPI router.
# =============================================================================

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.exceptions import UnhandledRequestError, ValidationFailedError
from core.validation import Dto, Shape, ensure_valid
from lib.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """
    Everything a request's stages share.

    Lives for one request only: `user` and `dto` are filled in by the
    guard and validation stages and discarded with the context.
    """
    request: Request
    store: DocumentStore
    user: dict[str, Any] | None = None
    dto: Dto | None = None

    def path_param(self, name: str) -> str:
        return self.request.path_params[name]


Stage = Callable[[RequestContext], Awaitable[Response | None]]


# =============================================================================
# Responses
# =============================================================================

def json_response(data: Any, status_code: int = 200) -> JSONResponse:
    """Serialize models (or lists of them) into a JSON response."""
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


def no_content() -> Response:
    return Response(status_code=204)


# =============================================================================
# Validation Stage
# =============================================================================

async def read_json_body(request: Request) -> Any:
    """
    Decode the request body; an empty body counts as an empty object.

    Raises:
        ValidationFailedError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return await request.json()
    except ValueError:
        raise ValidationFailedError([{
            "field": "body",
            "constraint": "is_json",
            "message": "request body must be valid JSON",
        }])


def validate(shape: Shape, skip_missing: bool = False) -> Stage:
    """
    Build a stage that validates the body against `shape` into ctx.dto.

    Args:
        shape: DTO constraint table
        skip_missing: Partial mode (used by update routes)
    """
    async def validation_stage(ctx: RequestContext) -> None:
        payload = await read_json_body(ctx.request)
        ctx.dto = ensure_valid(shape, payload, skip_missing=skip_missing)

    validation_stage.__name__ = f"validate_{shape.name}"
    return validation_stage


# =============================================================================
# Pipeline
# =============================================================================

@dataclass(frozen=True)
class Pipeline:
    """Ordered stages followed by the handler that must answer."""
    handler: Stage
    stages: tuple[Stage, ...] = ()

    async def run(self, ctx: RequestContext) -> Response:
        for stage in (*self.stages, self.handler):
            response = await stage(ctx)
            if response is not None:
                return response
        request = ctx.request
        raise UnhandledRequestError(f"{request.method} {request.url.path}")


@dataclass(frozen=True)
class Route:
    """One (verb, path) binding and the pipeline that serves it."""
    method: str
    path: str
    pipeline: Pipeline
    name: str
    status_code: int = 200


def compose(handler: Stage, *stages: Stage) -> Pipeline:
    """
    Chain stages in front of a handler.

    Example:
        compose(create_post, authenticate, validate(CreatePostDto))
    """
    return Pipeline(handler=handler, stages=tuple(stages))


def _endpoint(route: Route) -> Callable[[Request], Awaitable[Response]]:
    async def endpoint(request: Request) -> Response:
        ctx = RequestContext(request=request, store=request.app.state.store)
        return await route.pipeline.run(ctx)

    endpoint.__name__ = route.name
    return endpoint


def build_router(routes: Sequence[Route], tags: list[str] | None = None) -> APIRouter:
    """Mount every route's pipeline on a FastAPI router."""
    router = APIRouter(tags=tags)
    for route in routes:
        router.add_api_route(
            route.path,
            _endpoint(route),
            methods=[route.method],
            name=route.name,
            status_code=route.status_code,
        )
        logger.debug(
            f"Route {route.method} {route.path}: "
            + " -> ".join(s.__name__ for s in (*route.pipeline.stages, route.pipeline.handler))
        )
    return router
