"""Unit of work: one transactional boundary per request."""

import logging
from typing import Callable, Iterable, List, Optional

from django.db import DEFAULT_DB_ALIAS, transaction

from .repositories import (
    ApplicationUserRepository,
    CategoryRepository,
    CompanyRepository,
    OrderDetailRepository,
    OrderHeaderRepository,
    ProductImageRepository,
    ProductRepository,
    ShoppingCartRepository,
)

logger = logging.getLogger(__name__)


class _DirtyEntry:
    __slots__ = ("entity", "update_fields", "after_save")

    def __init__(self, entity, update_fields, after_save):
        self.entity = entity
        self.update_fields = update_fields
        self.after_save = after_save


class UnitOfWork:
    """Collects repository changes and commits them atomically.

    Repositories register new, dirty and deleted entities here. ``save()``
    writes them in that order inside a single ``transaction.atomic`` block.
    Unsaved changes are simply dropped with the instance.

    Usage:
        uow = UnitOfWork()
        uow.product.update(product_update)
        uow.save()
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self._new: List[object] = []
        self._dirty: List[_DirtyEntry] = []
        self._deleted: List[object] = []

        self.category = CategoryRepository(self)
        self.company = CompanyRepository(self)
        self.product = ProductRepository(self)
        self.product_image = ProductImageRepository(self)
        self.shopping_cart = ShoppingCartRepository(self)
        self.order_header = OrderHeaderRepository(self)
        self.order_detail = OrderDetailRepository(self)
        self.application_user = ApplicationUserRepository(self)

    @property
    def has_changes(self) -> bool:
        return bool(self._new or self._dirty or self._deleted)

    def register_new(self, entity) -> None:
        if entity not in self._new:
            self._new.append(entity)

    def register_dirty(
        self,
        entity,
        update_fields: Optional[Iterable[str]] = None,
        after_save: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Mark ``entity`` for saving.

        ``update_fields`` limits the columns written; None writes all of them.
        ``after_save`` runs inside the transaction once the entity is saved.
        """
        fields = list(update_fields) if update_fields is not None else None
        for entry in self._dirty:
            if entry.entity is entity:
                if entry.update_fields is None or fields is None:
                    entry.update_fields = None
                else:
                    entry.update_fields = sorted(set(entry.update_fields) | set(fields))
                entry.after_save = after_save or entry.after_save
                return
        self._dirty.append(_DirtyEntry(entity, fields, after_save))

    def register_deleted(self, entity) -> None:
        if entity not in self._deleted:
            self._deleted.append(entity)

    def save(self) -> None:
        """Persist every registered change in one transaction.

        Database errors propagate to the caller; registered changes are kept
        so a failed save leaves the unit of work as it was.
        """
        if not self.has_changes:
            return

        with transaction.atomic(using=self.using):
            for entity in self._new:
                entity.save(using=self.using)
            for entry in self._dirty:
                entry.entity.save(using=self.using, update_fields=entry.update_fields)
                if entry.after_save is not None:
                    entry.after_save(self.using)
            for entity in self._deleted:
                entity.delete(using=self.using)

        logger.debug(
            f"Unit of work saved: {len(self._new)} new, {len(self._dirty)} updated, "
            f"{len(self._deleted)} deleted"
        )
        self.discard()

    def discard(self) -> None:
        """Forget all registered changes."""
        self._new = []
        self._dirty = []
        self._deleted = []
