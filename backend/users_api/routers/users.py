# backend/users_api/routers/users.py
#
# CRUD over the single `users` table.
#   • GET    /users, /users/{id}   – open
#   • POST   /users                – bearer token required
#   • PUT    /users/{id}           – bearer token required
#   • DELETE /users/{id}           – bearer token required
#
# Order inside every write: validate → uniqueness check → store, so a
# rejected request never leaves partial state behind.

from fastapi import APIRouter, Depends, Response, status

from ..core.auth import require_user
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.validation import normalize_email, validate_user_create, validate_user_update
from ..models.user import UserCreate, UserOut, UserUpdate
from ..services.users import UserStore
from .deps import get_store

router = APIRouter(prefix="/users", tags=["users"])
protected = [Depends(require_user)]


@router.get("", response_model=list[UserOut])
async def list_users(store: UserStore = Depends(get_store)):
    return await store.list()


@router.get("/{user_id:int}", response_model=UserOut)
async def get_user(user_id: int, store: UserStore = Depends(get_store)):
    user = await store.get(user_id)
    if user is None:
        raise NotFoundError()
    return user


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED, dependencies=protected)
async def create_user(payload: UserCreate, response: Response, store: UserStore = Depends(get_store)):
    errors = validate_user_create(payload)
    if errors:
        raise ValidationError(errors)

    email = normalize_email(payload.email)
    if await store.exists_by_email(email):
        raise ConflictError()

    user = await store.create(name=payload.name.strip(), email=email, age=payload.age)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.put("/{user_id:int}", response_model=UserOut, dependencies=protected)
async def update_user(user_id: int, payload: UserUpdate, store: UserStore = Depends(get_store)):
    if await store.get(user_id) is None:
        raise NotFoundError()

    errors = validate_user_update(payload)
    if errors:
        raise ValidationError(errors)

    fields: dict = {}
    if payload.name is not None and payload.name.strip():
        fields["name"] = payload.name.strip()
    if payload.email is not None:
        fields["email"] = normalize_email(payload.email)
        if await store.exists_by_email(fields["email"], exclude_id=user_id):
            raise ConflictError()
    if payload.age is not None:
        fields["age"] = payload.age

    user = await store.update(user_id, fields)
    if user is None:            # deleted between the lookup and the write
        raise NotFoundError()
    return user


@router.delete("/{user_id:int}", status_code=status.HTTP_204_NO_CONTENT, dependencies=protected)
async def delete_user(user_id: int, store: UserStore = Depends(get_store)) -> Response:
    if not await store.delete(user_id):
        raise NotFoundError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
