"""
Actors

Every engine operation receives the identity it runs under explicitly.
There are two variants: ``Owner`` (any authenticated non-admin user, who
may only act on their own bookings) and ``Admin``.
"""

from dataclasses import dataclass

from shared.domain.base import ValueObject
from shared.domain.exceptions import PermissionDeniedError


@dataclass(frozen=True)
class Actor(ValueObject):
    user_id: int

    @property
    def is_admin(self) -> bool:
        return False

    def owns(self, owner_id: int) -> bool:
        return self.user_id == owner_id

    def can_manage(self, owner_id: int) -> bool:
        """Owner of the record or an administrator"""
        return self.is_admin or self.owns(owner_id)

    @staticmethod
    def from_user(user) -> 'Actor':
        is_admin = getattr(user, 'is_admin', None)
        if callable(is_admin) and is_admin():
            return Admin(user.id)
        return Owner(user.id)


@dataclass(frozen=True)
class Owner(Actor):
    pass


@dataclass(frozen=True)
class Admin(Actor):

    @property
    def is_admin(self) -> bool:
        return True


def require_admin(actor: Actor, message: str = "Unauthorized") -> None:
    if not actor.is_admin:
        raise PermissionDeniedError(message)


def require_manager(actor: Actor, owner_id: int, message: str = "Unauthorized") -> None:
    if not actor.can_manage(owner_id):
        raise PermissionDeniedError(message)
