"""Read-side access to published datasets."""

from .shuffle import MAX_LIMIT, DatasetNotFound, InvalidPageRequest, shuffled_page

__all__ = ["MAX_LIMIT", "DatasetNotFound", "InvalidPageRequest", "shuffled_page"]
