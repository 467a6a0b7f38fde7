# =============================================================================
# app/routers/users.py - User Controller
# =============================================================================
# Handlers for the /users resource. Creating a user is public
# (registration); updating and deleting are limited to the caller's own
# record.
# =============================================================================

from fastapi import Response

from app.pipeline import RequestContext, json_response, no_content
from core.services.post_service import PostService
from core.services.user_service import UserService


async def list_users(ctx: RequestContext) -> Response:
    users = await UserService(ctx.store).list_users()
    return json_response(users)


async def get_user(ctx: RequestContext) -> Response:
    user = await UserService(ctx.store).get_user(ctx.path_param("user_id"))
    return json_response(user)


async def list_user_posts(ctx: RequestContext) -> Response:
    """
    List the posts a user authored.

    Back-references to deleted posts are skipped rather than reported.
    """
    post_ids = await UserService(ctx.store).get_post_ids(ctx.path_param("user_id"))
    posts = await PostService(ctx.store).list_posts_by_ids(post_ids)
    return json_response(posts)


async def create_user(ctx: RequestContext) -> Response:
    user = await UserService(ctx.store).create_user(ctx.dto)
    return json_response(user, status_code=201)


async def modify_user(ctx: RequestContext) -> Response:
    """Apply a partial update to the caller's own record."""
    user_id = ctx.path_param("user_id")
    service = UserService(ctx.store)
    service.ensure_self(user_id, ctx.user)
    user = await service.update_user(user_id, ctx.dto)
    return json_response(user)


async def delete_user(ctx: RequestContext) -> Response:
    """Delete the caller's own record."""
    user_id = ctx.path_param("user_id")
    service = UserService(ctx.store)
    service.ensure_self(user_id, ctx.user)
    await service.delete_user(user_id)
    return no_content()
