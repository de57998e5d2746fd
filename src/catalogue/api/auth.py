"""Request identity resolved from upstream authentication headers.

The gateway in front of the API authenticates the caller and forwards the
identity as ``X-User-Id``, ``X-User-Name`` and ``X-User-Role``.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

ADMIN_ROLES = frozenset({"admin"})


@dataclass(frozen=True)
class RequestUser:
    id: str
    name: str | None = None
    role: str = "user"


def current_user(
    x_user_id: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_role: str = Header(default="user"),
) -> RequestUser:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Please login to access this resource")
    return RequestUser(id=x_user_id, name=x_user_name, role=x_user_role)


def admin_user(user: RequestUser = Depends(current_user)) -> RequestUser:
    if user.role not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail=f"Role: {user.role} is not allowed to access this resource")
    return user
