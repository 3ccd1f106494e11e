# billy_bingo/api/v1/routers/users.py
from fastapi import APIRouter, Depends, status

from billy_bingo.api.v1.deps import get_current_user
from billy_bingo.models.user import User
from billy_bingo.schemas.user import LoginIn, RegisterIn, UserUpdateIn
from billy_bingo.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])

# Unscoped user CRUD; mounted only when ENABLE_USER_ADMIN_ROUTES is on
admin_router = APIRouter(prefix="/users", tags=["users-admin"])


# ===== Account routes =====
@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterIn):
    """
    Register a new user account.

    Name and email must both be unique; each collision is reported separately
    as a 409. The password is hashed before storage and never returned.

    Returns:
        dict: Envelope with ``data.user`` (public fields) and ``data.token``
        (bearer token valid for 7 days).

    Raises:
        ValidationError (400): Missing or malformed name/email/password
        Conflict (409): "Email already exists" / "Username already exists"
    """
    user = await user_service.register_user(body.name, body.email, body.password)
    return {
        "success": True,
        "message": "User registered successfully",
        "data": user_service.auth_payload(user),
    }


@router.post("/login")
async def login(body: LoginIn):
    """
    Authenticate by email and password and issue a bearer token.

    Unknown email and wrong password give the same 401 response.
    """
    user = await user_service.authenticate(body.email, body.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": user_service.auth_payload(user),
    }


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """
    Get the currently authenticated user.
    """
    return {
        "success": True,
        "message": "Current user retrieved successfully",
        "data": user.to_public(),
    }


@router.put("/me")
async def update_me(body: UserUpdateIn, user: User = Depends(get_current_user)):
    """
    Partially update the current user's profile.

    Only ``name`` and ``email`` are applied; a ``password`` field is validated
    but ignored by this route.
    """
    updated = await user_service.update_user(user, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "User updated successfully",
        "data": updated.to_public(),
    }


# ===== Admin-style CRUD =====
@admin_router.get("")
async def list_users():
    """
    List all users, newest first.
    """
    users = await user_service.list_users()
    return {
        "success": True,
        "message": "Users retrieved successfully",
        "data": [u.to_public() for u in users],
    }


@admin_router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: RegisterIn):
    """
    Create a user with the same rules as registration, without issuing a token.
    """
    user = await user_service.register_user(body.name, body.email, body.password)
    return {
        "success": True,
        "message": "User created successfully",
        "data": user.to_public(),
    }


@admin_router.get("/{user_id}")
async def get_user(user_id: str):
    """
    Get a user by id.

    Raises:
        NotFound (404): Unknown or malformed id
    """
    user = await user_service.get_user(user_id)
    return {
        "success": True,
        "message": "User retrieved successfully",
        "data": user.to_public(),
    }


@admin_router.put("/{user_id}")
async def update_user(user_id: str, body: UserUpdateIn):
    """
    Partially update any user (name/email only).
    """
    user = await user_service.get_user(user_id)
    updated = await user_service.update_user(user, body.model_dump(exclude_unset=True))
    return {
        "success": True,
        "message": "User updated successfully",
        "data": updated.to_public(),
    }


@admin_router.delete("/{user_id}")
async def delete_user(user_id: str):
    """
    Permanently delete a user and, through the foreign key cascade, their cards.
    """
    await user_service.delete_user(user_id)
    return {"success": True, "message": "User deleted successfully", "data": None}
