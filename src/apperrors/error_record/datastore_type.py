"""Whether the error store is shared between service instances."""

from enum import StrEnum

from loguru import logger
from sqlalchemy.engine import make_url

__all__ = ["DataStoreType", "data_store_type_of", "resolve_data_store_type"]


class DataStoreType(StrEnum):
    """Sharing mode of the database holding the error records."""

    SHARED = "SHARED"
    NOT_SHARED = "NOT_SHARED"

    @property
    def shared(self) -> bool:
        """Whether other instances see the errors recorded by this one."""
        return self is DataStoreType.SHARED


def _is_embedded(db_url: str) -> bool:
    return make_url(db_url).get_backend_name() == "sqlite"


def data_store_type_of(db_url: str) -> DataStoreType:
    """Detect the sharing mode from a database URL.

    SQLite, whether file-based or in memory, is local to one instance. Any
    networked database is treated as shared.
    """
    return DataStoreType.NOT_SHARED if _is_embedded(db_url) else DataStoreType.SHARED


def resolve_data_store_type(
    db_url: str, override: DataStoreType | str | None = None
) -> DataStoreType:
    """Apply a configured override to the detected sharing mode.

    An embedded database can never be shared, so a ``SHARED`` override on a
    SQLite URL is replaced by ``NOT_SHARED``.

    Args:
        db_url: Database URL of the store.
        override: Explicitly configured sharing mode, if any.

    Returns:
        DataStoreType: The effective sharing mode.
    """
    if override is None:
        return data_store_type_of(db_url)

    requested = DataStoreType(override)
    if requested.shared and _is_embedded(db_url):
        logger.warning(
            "Embedded database cannot be shared, using NOT_SHARED",
            requested=requested,
        )
        return DataStoreType.NOT_SHARED
    return requested
