# src/core/access/guard.py
"""
Проверка прав вызывающего.

Таблица ролей фиксируется при создании реестра. Guard не хранит
состояния сверх неё и не имеет побочных эффектов.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.common.constants import Role
from src.core.errors import Unauthorized


class RoleTable(BaseModel):
    """Владелец и администратор водителей. Могут совпадать."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Идентификатор владельца")
    driver_admin: str = Field(..., min_length=1, description="Идентификатор администратора водителей")


class AccessGuard:
    """Отвечает на вопрос «есть ли у principal роль role»."""

    def __init__(self, roles: RoleTable) -> None:
        self._roles = roles

    @property
    def roles(self) -> RoleTable:
        return self._roles

    def has_role(self, principal: str, role: Role) -> bool:
        match role:
            case Role.OWNER:
                return principal == self._roles.owner
            case Role.DRIVER_ADMIN:
                return principal == self._roles.driver_admin
            case Role.OWNER_OR_DRIVER_ADMIN:
                return principal in (self._roles.owner, self._roles.driver_admin)
        return False

    def require(self, principal: str, role: Role) -> None:
        """
        Проверяет роль вызывающего.

        Raises:
            Unauthorized: если роль не совпадает
        """
        if not self.has_role(principal, role):
            raise Unauthorized(f"{principal!r} не имеет роли {role.value}")
