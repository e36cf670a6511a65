# =========================================================
# ACCESS POLICY
#
# Pure checks over an already-authenticated principal.
# No database access happens here: callers fetch first when a
# rule needs a resource, then ask the policy.
# =========================================================

import enum
import uuid
from dataclasses import dataclass
from typing import Iterable

from restaurant_api.core.errors import Unauthorized


class Role(str, enum.Enum):
    CLIENT = "client"
    ENTERPRISE = "enterprise"


@dataclass(frozen=True)
class Principal:
    id: uuid.UUID
    role: Role


def require_role(caller: Principal | None, *roles: Role) -> Principal:
    if caller is None or caller.role not in roles:
        raise Unauthorized()
    return caller


def require_ownership(caller: Principal | None, owner_id: uuid.UUID) -> Principal:
    if caller is None or caller.id != owner_id:
        raise Unauthorized()
    return caller


def require_enterprise_owner(caller: Principal | None, enterprise_id: uuid.UUID) -> Principal:
    require_role(caller, Role.ENTERPRISE)
    return require_ownership(caller, enterprise_id)


def require_client_orders_access(caller: Principal | None, client_id: uuid.UUID) -> Principal:
    # Clients read only their own orders, enterprises are narrowed later
    require_role(caller, Role.CLIENT, Role.ENTERPRISE)
    if caller.role == Role.CLIENT:
        require_ownership(caller, client_id)
    return caller


def visible_client_orders(caller: Principal, orders: Iterable) -> list:
    if caller.role == Role.ENTERPRISE:
        return [order for order in orders if order.enterprise_id == caller.id]
    return list(orders)
