"""Generic repository over a single Django model.

Reads go straight to the ORM. Writes are only registered with the owning
unit of work and reach the database when ``UnitOfWork.save()`` runs.
"""

from typing import Iterable, List, Optional, Sequence, Union

Include = Union[str, Sequence[str], None]


def _include_names(include: Include) -> List[str]:
    if not include:
        return []
    if isinstance(include, str):
        include = include.split(",")
    return [name.strip() for name in include if name.strip()]


def _needs_prefetch(model, name: str) -> bool:
    """True if any hop of ``name`` crosses a multi-valued relation."""
    for part in name.split("__"):
        field = model._meta.get_field(part)
        if field.many_to_many or field.one_to_many:
            return True
        model = field.related_model
    return False


class Repository:
    """CRUD-style access to one model.

    Subclasses set ``model``.
    """

    model = None

    def __init__(self, unit_of_work):
        self._unit_of_work = unit_of_work

    def _queryset(self, include: Include = None):
        queryset = self.model._default_manager.using(self._unit_of_work.using)
        for name in _include_names(include):
            if _needs_prefetch(self.model, name):
                queryset = queryset.prefetch_related(name)
            else:
                queryset = queryset.select_related(name)
        return queryset

    def get(self, include: Include = None, **filters) -> Optional[object]:
        """
        Find the first entity matching ``filters``.

        Args:
            include: Related names to load eagerly ("category,images" or a list)
            **filters: Django lookup arguments

        Returns:
            Entity or None if not found
        """
        return self._queryset(include).filter(**filters).first()

    def get_all(self, include: Include = None, order_by: Sequence[str] = (), **filters) -> list:
        """Find all entities matching ``filters``."""
        queryset = self._queryset(include).filter(**filters)
        if order_by:
            queryset = queryset.order_by(*order_by)
        return list(queryset)

    def exists(self, **filters) -> bool:
        return self._queryset().filter(**filters).exists()

    def add(self, entity) -> None:
        self._unit_of_work.register_new(entity)

    def update(self, entity, update_fields: Optional[Sequence[str]] = None) -> None:
        """Schedule a save of ``entity``, limited to ``update_fields`` when given."""
        self._unit_of_work.register_dirty(entity, update_fields=update_fields)

    def remove(self, entity) -> None:
        self._unit_of_work.register_deleted(entity)

    def remove_range(self, entities: Iterable) -> None:
        for entity in entities:
            self.remove(entity)
