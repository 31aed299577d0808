"""Data access layer - repositories and the unit of work.

Repositories wrap the Django ORM per entity; the unit of work groups
their changes into one transaction per request.
"""

from bulkybook.data.repositories import ProductUpdate
from bulkybook.data.repository import Repository
from bulkybook.data.unit_of_work import UnitOfWork

__all__ = [
    "ProductUpdate",
    "Repository",
    "UnitOfWork",
]
