"""
Domain operations over the store.

Each query class is bound to one session, so the operations of a request
share its transaction.
"""

from .base import BaseQueries
from .dashboard import DASHBOARD_LIST_LIMIT, DashboardQueries
from .pets import PET_FIELDS, PetQueries, merge_pet_fields
from .records import RECORD_FIELDS, RecordQueries

__all__ = [
    "BaseQueries",
    "PetQueries",
    "RecordQueries",
    "DashboardQueries",
    "merge_pet_fields",
    "PET_FIELDS",
    "RECORD_FIELDS",
    "DASHBOARD_LIST_LIMIT",
]
