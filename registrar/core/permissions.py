from enum import Enum

from fastapi import Depends, Header, HTTPException, status


class ActorRole(str, Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    STUDENT = "student"


STAFF_ROLES = {ActorRole.ADMIN, ActorRole.SUPERVISOR}


# Authentication happens upstream; the gateway forwards the validated role.
def get_actor_role(x_actor_role: str = Header(default=ActorRole.ADMIN.value)) -> ActorRole:
    try:
        return ActorRole(x_actor_role.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown actor role: {x_actor_role}",
        )


def require_staff(role: ActorRole = Depends(get_actor_role)) -> ActorRole:
    if role not in STAFF_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff role required",
        )
    return role


def require_admin(role: ActorRole = Depends(get_actor_role)) -> ActorRole:
    if role is not ActorRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return role
