"""
Users endpoints.

Passwords arrive in plaintext (request body or path) and are only ever
compared against, or replaced by, bcrypt hashes. Responses never carry a
password or a hash, and passwords are never logged.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from .. import validation
from ..database import RepositoryException, UserRepository
from ..models import User, UserCreate, UserSummary
from .dependencies import get_user_repository
from .errors import bad_request, not_found, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Users", tags=["Users"])


@router.get("/All", response_model=list[UserSummary])
def get_all_users(repo: UserRepository = Depends(get_user_repository)):
    users = repo.get_all_summaries()
    if not users:
        raise not_found("Users are not found")
    return users


@router.get("/DoesUsernameExist/{username}", response_model=bool)
def does_username_exist(username: str, repo: UserRepository = Depends(get_user_repository)):
    if not validation.has_text(username):
        raise bad_request("Username should be provided")
    return repo.username_exists(username)


@router.get("/IsPasswordUsedByUser/{user_id}/{password}", response_model=bool)
def is_password_used_by_user(
    user_id: int, password: str, repo: UserRepository = Depends(get_user_repository)
):
    """Whether ``password`` matches the user's current or a previous password."""
    if not validation.is_valid_id(user_id) or not validation.is_valid_password(password):
        raise bad_request("Password should be provided")
    return repo.is_password_used_by_user(user_id, password)


@router.get("/{user_id}", response_model=User, name="get_user")
def get_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    if not validation.is_valid_id(user_id):
        raise bad_request("Id is not valid")

    user = repo.get_by_id(user_id)
    if user is None:
        raise not_found(f"User with id {user_id} is not found.")
    return user


@router.get("/{username}/{password}", response_model=User)
def get_user_by_credentials(
    username: str, password: str, repo: UserRepository = Depends(get_user_repository)
):
    if not validation.has_text(username) or not validation.is_valid_password(password):
        raise bad_request()

    user = repo.authenticate(username, password)
    if user is None:
        raise not_found(f"User with username {username} and this password is not found")
    return user


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def add_user(
    user: UserCreate,
    request: Request,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
):
    if not validation.is_valid_user(user):
        raise bad_request()

    try:
        created = repo.create_user(user)
    except RepositoryException:
        return server_error("An error occurred while adding the new user.")

    response.headers["Location"] = str(request.url_for("get_user", user_id=created.user_id))
    return created


@router.put("/{user_id}/{password}")
def update_password(
    user_id: int, password: str, repo: UserRepository = Depends(get_user_repository)
):
    if not validation.is_valid_id(user_id) or not validation.is_valid_password(password):
        raise bad_request()
    if not repo.exists(user_id):
        raise not_found(f"User with id {user_id} is not found")

    try:
        updated = repo.update_password(user_id, password)
    except RepositoryException:
        return server_error("An error occurred while updating the password.")
    if not updated:
        raise not_found(f"User with id {user_id} is not found")
    return "Password is updated successfully"
