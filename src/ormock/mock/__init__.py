"""Mock ORM surface: database, models, records, associations, data types."""

from ormock.mock.associations import Association, AssociationKind
from ormock.mock.database import Database
from ormock.mock.model import Model
from ormock.mock.record import Record

__all__ = [
    "Association",
    "AssociationKind",
    "Database",
    "Model",
    "Record",
]
