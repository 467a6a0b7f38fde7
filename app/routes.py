# =============================================================================
# app/routes.py - Route Bindings
# =============================================================================
# The one place that says which stages each route runs, in which order.
# Reads are public; writes go through `authenticate` first, then
# validation, then the controller handler.
#
#   Verb    Path                      Stages
#   GET     /posts                    list_posts
#   GET     /posts/{post_id}          get_post
#   POST    /posts                    authenticate, validate(strict), create_post
#   PATCH   /posts/{post_id}          authenticate, validate(partial), modify_post
#   DELETE  /posts/{post_id}          authenticate, delete_post
#   ...and the same pattern for /users, with registration left public.
# =============================================================================

from app.auth import authenticate
from app.auth.routes import get_current_user_info
from app.pipeline import Route, build_router, compose, validate
from app.routers import posts, users
from core.models.dto import CreatePostDto, CreateUserDto

POST_ROUTES = [
    Route("GET", "/posts", compose(posts.list_posts), name="list_posts"),
    Route("GET", "/posts/{post_id}", compose(posts.get_post), name="get_post"),
    Route(
        "POST", "/posts",
        compose(posts.create_post, authenticate, validate(CreatePostDto)),
        name="create_post",
        status_code=201,
    ),
    Route(
        "PATCH", "/posts/{post_id}",
        compose(posts.modify_post, authenticate, validate(CreatePostDto, skip_missing=True)),
        name="modify_post",
    ),
    Route(
        "DELETE", "/posts/{post_id}",
        compose(posts.delete_post, authenticate),
        name="delete_post",
        status_code=204,
    ),
]

USER_ROUTES = [
    Route("GET", "/users", compose(users.list_users), name="list_users"),
    Route("GET", "/users/{user_id}", compose(users.get_user), name="get_user"),
    Route("GET", "/users/{user_id}/posts", compose(users.list_user_posts), name="list_user_posts"),
    Route(
        "POST", "/users",
        compose(users.create_user, validate(CreateUserDto)),
        name="create_user",
        status_code=201,
    ),
    Route(
        "PATCH", "/users/{user_id}",
        compose(users.modify_user, authenticate, validate(CreateUserDto, skip_missing=True)),
        name="modify_user",
    ),
    Route(
        "DELETE", "/users/{user_id}",
        compose(users.delete_user, authenticate),
        name="delete_user",
        status_code=204,
    ),
]

AUTH_ROUTES = [
    Route("GET", "/auth/me", compose(get_current_user_info, authenticate), name="get_current_user_info"),
]

posts_router = build_router(POST_ROUTES, tags=["Posts"])
users_router = build_router(USER_ROUTES, tags=["Users"])
auth_router = build_router(AUTH_ROUTES, tags=["Auth"])
