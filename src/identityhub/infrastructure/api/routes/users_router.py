"""Router for user identity and role membership.

Endpoints called by the authentication gateway (create-or-update on login,
authority lookups) and by administration tooling (role changes).
"""

from fastapi import APIRouter, HTTPException, status

from identityhub.application.services import retry_on_conflict
from identityhub.core.config import get_settings
from identityhub.core.logging import get_logger
from identityhub.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateIdentityError,
    NotFoundError,
    ValidationFailureError,
)
from identityhub.domain.services import sort_role_kinds
from identityhub.infrastructure.api.dependencies import (
    Engine,
    MembershipManager,
    Projector,
)
from identityhub.infrastructure.api.schemas import (
    AuthoritiesResponse,
    CreateUserRequest,
    RoleAssignmentRequest,
    UpdateUserRequest,
    UserResponse,
)

router = APIRouter()
logger = get_logger(__name__)


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _conflict(e: DuplicateIdentityError | ConcurrentModificationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


def _unprocessable(e: ValidationFailureError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        detail={"field": e.field, "message": e.message},
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={409: {"description": "User already exists"}},
)
async def create_user(request: CreateUserRequest, engine: Engine) -> UserResponse:
    """Create a user with the default USER role."""
    logger.info("Creating user", email=request.email)
    try:
        user = await engine.create_user(
            email=request.email,
            external_id=request.external_id,
            name=request.name,
            picture=request.picture,
        )
    except DuplicateIdentityError as e:
        raise _conflict(e)
    except ValidationFailureError as e:
        raise _unprocessable(e)
    return UserResponse.from_entity(user)


@router.post(
    "/create-or-update",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
)
async def create_or_update_user(request: CreateUserRequest, engine: Engine) -> UserResponse:
    """Create the user if absent, otherwise update its profile.

    Idempotent; called by the authentication gateway on every login.
    """
    logger.info("Creating or updating user", email=request.email)
    try:
        user = await retry_on_conflict(
            lambda: engine.reconcile(
                email=request.email,
                external_id=request.external_id,
                name=request.name,
                picture=request.picture,
            ),
            attempts=get_settings().conflict_retry_attempts,
        )
    except (DuplicateIdentityError, ConcurrentModificationError) as e:
        raise _conflict(e)
    except ValidationFailureError as e:
        raise _unprocessable(e)
    return UserResponse.from_entity(user)


# Legacy /google/... paths
@router.get("/google/{external_id}", response_model=UserResponse, include_in_schema=False)
@router.get(
    "/external/{external_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
async def get_user_by_external_id(external_id: str, engine: Engine) -> UserResponse:
    """Get a user and its roles by external identity provider ID."""
    try:
        user = await engine.get_user_by_external_id(external_id)
    except NotFoundError as e:
        raise _not_found(e)
    return UserResponse.from_entity(user)


@router.get(
    "/google/{external_id}/authorities",
    response_model=AuthoritiesResponse,
    include_in_schema=False,
)
@router.get(
    "/external/{external_id}/authorities",
    response_model=AuthoritiesResponse,
)
async def get_authorities_by_external_id(
    external_id: str, projector: Projector
) -> AuthoritiesResponse:
    """Get authorities for a user by external ID. Unknown users get an empty list."""
    authorities = await projector.get_authorities_for_external_id(external_id)
    return AuthoritiesResponse(authorities=authorities)


@router.put(
    "/{email}",
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
async def update_user(email: str, request: UpdateUserRequest, engine: Engine) -> UserResponse:
    """Update a user's name and picture."""
    logger.info("Updating user", email=email)
    try:
        user = await retry_on_conflict(
            lambda: engine.update_profile(email, name=request.name, picture=request.picture),
            attempts=get_settings().conflict_retry_attempts,
        )
    except NotFoundError as e:
        raise _not_found(e)
    except ConcurrentModificationError as e:
        raise _conflict(e)
    return UserResponse.from_entity(user)


@router.get(
    "/{email}",
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
async def get_user_by_email(email: str, engine: Engine) -> UserResponse:
    """Get a user and its roles by email."""
    try:
        user = await engine.get_user_by_email(email)
    except NotFoundError as e:
        raise _not_found(e)
    return UserResponse.from_entity(user)


@router.post(
    "/{email}/roles",
    response_model=UserResponse,
    responses={404: {"description": "User or role not found"}},
)
async def assign_role(
    email: str, request: RoleAssignmentRequest, manager: MembershipManager
) -> UserResponse:
    """Assign a role to a user. Assigning a held role changes nothing."""
    logger.info("Assigning role", email=email, role=request.role_name.value)
    try:
        user = await retry_on_conflict(
            lambda: manager.assign_role(email, request.role_name),
            attempts=get_settings().conflict_retry_attempts,
        )
    except NotFoundError as e:
        raise _not_found(e)
    except ConcurrentModificationError as e:
        raise _conflict(e)
    return UserResponse.from_entity(user)


@router.delete(
    "/{email}/roles/{role_name}",
    response_model=UserResponse,
    responses={404: {"description": "User or role not found"}},
)
async def remove_role(email: str, role_name: str, manager: MembershipManager) -> UserResponse:
    """Remove a role from a user. Removing a role not held changes nothing."""
    logger.info("Removing role", email=email, role=role_name)
    try:
        user = await retry_on_conflict(
            lambda: manager.remove_role(email, role_name),
            attempts=get_settings().conflict_retry_attempts,
        )
    except NotFoundError as e:
        raise _not_found(e)
    except ConcurrentModificationError as e:
        raise _conflict(e)
    return UserResponse.from_entity(user)


@router.get(
    "/{email}/roles",
    response_model=list[str],
    responses={404: {"description": "User not found"}},
)
async def get_user_roles(email: str, manager: MembershipManager) -> list[str]:
    """Get the role names held by a user."""
    try:
        roles = await manager.get_roles(email)
    except NotFoundError as e:
        raise _not_found(e)
    return [kind.value for kind in sort_role_kinds(role.kind for role in roles)]


@router.get(
    "/{email}/authorities",
    response_model=AuthoritiesResponse,
)
async def get_authorities(email: str, projector: Projector) -> AuthoritiesResponse:
    """Get authorities for a user by email. Unknown users get an empty list."""
    authorities = await projector.get_authorities_for_email(email)
    return AuthoritiesResponse(authorities=authorities)
