"""
User endpoints.

Each handler awaits one ``UserStore`` operation and turns its outcome
into a response.  Not‑found and conflict responses carry no body, so
they are returned as bare ``Response`` objects rather than raised as
``HTTPException`` (which would add a ``detail`` payload).
"""

from typing import Annotated, List, Union

from fastapi import APIRouter, Depends, Path, Request, Response, status

from users_api.app.schemas.user import USER_ID_MAX, USER_ID_MIN, User
from users_api.app.services.user_store import (
    CreateResult,
    DeleteResult,
    UpdateResult,
    UserStore,
)

router = APIRouter()

UserId = Annotated[int, Path(ge=USER_ID_MIN, le=USER_ID_MAX)]


def get_user_store(request: Request) -> UserStore:
    """Return the store created for this application at startup."""
    return request.app.state.user_store


@router.get("", response_model=List[User])
async def list_users(store: UserStore = Depends(get_user_store)) -> List[User]:
    """Return all users in no particular order."""
    return [user async for user in store.list_all()]


@router.get(
    "/{user_id}",
    name="get_user",
    response_model=User,
    responses={status.HTTP_404_NOT_FOUND: {"description": "No user with this id"}},
)
async def get_user(
    user_id: UserId, store: UserStore = Depends(get_user_store)
) -> Union[User, Response]:
    """Return the user with ``user_id``, or an empty 404 if there is none."""
    user = await store.find_by_id(user_id)
    if user is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return user


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={status.HTTP_409_CONFLICT: {"description": "A user with this id exists"}},
)
async def create_user(
    user: User, request: Request, store: UserStore = Depends(get_user_store)
) -> Response:
    """Create a user with a client‑chosen id.

    Both outcomes carry a ``Location`` header: the new resource on
    ``201 Created`` and the one already holding the id on ``409
    Conflict``.
    """
    result = await store.create(user)
    location = str(request.url_for("get_user", user_id=user.id))
    if result is CreateResult.CREATED:
        return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})
    if result is CreateResult.ALREADY_EXISTS:
        return Response(status_code=status.HTTP_409_CONFLICT, headers={"Location": location})
    raise AssertionError(f"unhandled create result {result!r}")


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_404_NOT_FOUND: {"description": "No user with this id"}},
)
async def update_user(user: User, store: UserStore = Depends(get_user_store)) -> Response:
    """Replace the name of the user identified by ``user.id``."""
    result = await store.update(user)
    if result is UpdateResult.UPDATED:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    if result is UpdateResult.NOT_FOUND:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    raise AssertionError(f"unhandled update result {result!r}")


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={status.HTTP_404_NOT_FOUND: {"description": "No user with this id"}},
)
async def delete_user(
    user_id: UserId, store: UserStore = Depends(get_user_store)
) -> Response:
    """Delete the user with ``user_id``; 200 when it existed, empty 404 otherwise."""
    result = await store.delete(user_id)
    if result is DeleteResult.DELETED:
        return Response(status_code=status.HTTP_200_OK)
    if result is DeleteResult.NOT_FOUND:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    raise AssertionError(f"unhandled delete result {result!r}")
