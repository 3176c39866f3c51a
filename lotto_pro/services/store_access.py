"""Who may touch which store."""

from __future__ import annotations

from sqlalchemy.orm import Session

from lotto_pro.auth import ROLE_STORE_ACCOUNT, ROLE_STORE_OWNER, AuthUser
from lotto_pro.errors import StoreAccessError
from lotto_pro.models.store import Store
from lotto_pro.repositories.store_repository import StoreRepository


class StoreAccessService:
    def __init__(self, repository: StoreRepository | None = None) -> None:
        self._repo = repository or StoreRepository()

    def authorize(self, session: Session, store_id: int, user: AuthUser | None) -> Store:
        """Return the store if ``user`` may act on it.

        Owners reach only their own stores; a store account only itself.
        Unknown or foreign stores look the same to an owner (404).
        """

        if user is None:
            raise StoreAccessError(401, "Unauthorized")

        if user.role == ROLE_STORE_OWNER:
            store = self._repo.get_owned(session, store_id, user.id)
            if store is None:
                raise StoreAccessError(404, "Store not found")
            return store

        if user.role == ROLE_STORE_ACCOUNT:
            if user.id != store_id:
                raise StoreAccessError(403, "Cannot access another store")
            store = self._repo.get(session, store_id)
            if store is None:
                raise StoreAccessError(404, "Store not found")
            return store

        raise StoreAccessError(403, "Store owner or store account access required")
