# restaurant_api/core/auth.py

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials

from restaurant_api.core.access import Principal, Role, require_role
from restaurant_api.core.jwt import principal_from_token
from restaurant_api.core.oauth2 import bearer_scheme


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    # The token is trusted once verified, no user lookup per request
    token = credentials.credentials if credentials else None
    return principal_from_token(token)


def require_roles(*roles: Role):
    def _checker(current_user: Principal = Depends(get_current_principal)) -> Principal:
        return require_role(current_user, *roles)
    return _checker


get_current_client = require_roles(Role.CLIENT)
get_current_enterprise = require_roles(Role.ENTERPRISE)
