# =============================================================================
# app/routers/posts.py - Post Controller
# =============================================================================
# Handlers for the /posts resource. Each runs as the last stage of its
# route's pipeline (see app/routes.py), so by the time it is called:
# - ctx.user is set on routes guarded by `authenticate`
# - ctx.dto is set on routes with a `validate(...)` stage
#
# Failures are raised, never answered here; the error translator in
# app/exceptions.py turns them into responses.
# =============================================================================

from fastapi import Response

from app.pipeline import RequestContext, json_response, no_content
from core.services.post_service import PostService


async def list_posts(ctx: RequestContext) -> Response:
    """List every post with authors populated."""
    posts = await PostService(ctx.store).list_posts()
    return json_response(posts)


async def get_post(ctx: RequestContext) -> Response:
    """Get one post; 404 if the id does not exist."""
    post = await PostService(ctx.store).get_post(ctx.path_param("post_id"))
    return json_response(post)


async def create_post(ctx: RequestContext) -> Response:
    """
    Create a post authored by the caller.

    Returns 201 with the new post and the caller as its only author.
    """
    post = await PostService(ctx.store).create_post(ctx.dto, author_id=ctx.user["id"])
    return json_response(post, status_code=201)


async def modify_post(ctx: RequestContext) -> Response:
    """Apply a partial update (title and/or content)."""
    post = await PostService(ctx.store).update_post(ctx.path_param("post_id"), ctx.dto)
    return json_response(post)


async def delete_post(ctx: RequestContext) -> Response:
    """Delete a post; 204 on success, 404 if it was already gone."""
    await PostService(ctx.store).delete_post(ctx.path_param("post_id"))
    return no_content()
