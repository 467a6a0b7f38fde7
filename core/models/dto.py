# =============================================================================
# core/models/dto.py - Request DTO Shapes
# =============================================================================
# Constraint tables for every inbound payload. Routes pick a shape and a
# mode (strict for create, partial for update) in app/routes.py.
# =============================================================================

from core.validation import FieldRule, Shape

AddressDto = Shape("AddressDto", {
    "city": FieldRule("string", required=True),
    "street": FieldRule("string", required=True),
})

CreatePostDto = Shape("CreatePostDto", {
    "title": FieldRule("string", required=True),
    "content": FieldRule("string", required=True),
})

CreateUserDto = Shape("CreateUserDto", {
    "name": FieldRule("string", required=True),
    "email": FieldRule("string", required=True),
    "password": FieldRule("string", required=True),
    "address": FieldRule("object", shape=AddressDto),
})
