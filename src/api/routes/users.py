"""User API routes.

Endpoints:
- GET /User/GetUserById/{userId}: Get one user
- GET /User/GetAllUsers: List all users
- POST /User/AddUser: Create a user (assigns ID and customer number, hashes password)
- POST /User/Login: Check email and password
- PUT /User/UpdateUser/{userId}: Replace a user
- DELETE /User/DeleteUser/{userId}: Delete a user
- GET /User/version: Service name, version and host address

Handlers are plain ``def`` so FastAPI runs them in its thread pool;
password hashing is CPU-bound and the Mongo driver blocks.
"""

import logging
import socket

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from api.dependencies import get_user_collection
from api.models import (
    AuthResponse,
    LoginRequest,
    UserRequest,
    UserResponse,
    VersionResponse,
)
from domain.model.errors import DuplicateError, InvalidArgumentError, StorageUnavailableError
from port.user_collection import UserCollection
from services import auth_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/User", tags=["users"])


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, InvalidArgumentError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, DuplicateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable")


@router.get("/GetUserById/{userId}", response_model=UserResponse)
def get_user_by_id(userId: str, collection: UserCollection = Depends(get_user_collection)):
    """Get a user by ID."""
    try:
        user = user_service.get_user_by_id(collection, userId)
    except (InvalidArgumentError, StorageUnavailableError) as e:
        raise _to_http_error(e)

    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.from_domain(user)


@router.get("/GetAllUsers", response_model=list[UserResponse])
def get_all_users(collection: UserCollection = Depends(get_user_collection)):
    """List every stored user (unordered)."""
    try:
        users = user_service.get_all_users(collection)
    except StorageUnavailableError as e:
        raise _to_http_error(e)
    return [UserResponse.from_domain(u) for u in users]


@router.post("/AddUser", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def add_user(request: UserRequest, collection: UserCollection = Depends(get_user_collection)):
    """Create a user. ID and customer number in the body are ignored."""
    try:
        user = user_service.create_user(collection, request.to_domain())
    except (InvalidArgumentError, DuplicateError, StorageUnavailableError) as e:
        raise _to_http_error(e)
    return UserResponse.from_domain(user)


@router.post("/Login", response_model=AuthResponse)
def login(request: LoginRequest, collection: UserCollection = Depends(get_user_collection)):
    """Check credentials. 200 with matched=true, or 401 with matched=false."""
    try:
        result = auth_service.login(collection, request.to_domain())
    except (InvalidArgumentError, StorageUnavailableError) as e:
        raise _to_http_error(e)

    response = AuthResponse.from_domain(result)
    if not result.matched:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=response.model_dump())
    return response


@router.put("/UpdateUser/{userId}", response_model=UserResponse)
def update_user(
    userId: str,
    request: UserRequest,
    collection: UserCollection = Depends(get_user_collection),
):
    """Replace a user in full.

    customerNumber and password are stored exactly as sent; send back the
    current values (password hash included) to keep them.
    """
    try:
        user = user_service.update_user(collection, userId, request.to_domain())
    except (InvalidArgumentError, DuplicateError, StorageUnavailableError) as e:
        raise _to_http_error(e)

    if user is None:
        raise HTTPException(status_code=404, detail="User not found or no changes made")
    return UserResponse.from_domain(user)


@router.delete("/DeleteUser/{userId}")
def delete_user(userId: str, collection: UserCollection = Depends(get_user_collection)) -> bool:
    """Delete a user."""
    try:
        deleted = user_service.delete_user(collection, userId)
    except (InvalidArgumentError, StorageUnavailableError) as e:
        raise _to_http_error(e)

    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return True


def _host_address() -> str:
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as e:
        logger.error("Could not resolve host address", extra={"error": str(e)})
        return "Could not resolve IP-address"


@router.get("/version", response_model=VersionResponse)
def version(request: Request):
    """Service name, version and the address this instance answers from."""
    return VersionResponse(
        service=request.app.title,
        version=request.app.version,
        hosted_at_address=_host_address(),
    )
