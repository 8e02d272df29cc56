"""Attachment metadata lookups with a prefetchable cache."""

import logging
from collections.abc import Iterable
from typing import Protocol

import duckdb

from cdn_responsive_images.mirror.repository import get_attachment, get_attachments
from cdn_responsive_images.models import ImageMetadata

log = logging.getLogger(__name__)


class MetadataStore(Protocol):
    """What the renderers need from attachment storage."""

    def get_attachment_metadata(self, attachment_id: int) -> ImageMetadata | None: ...

    def prefetch(self, attachment_ids: Iterable[int]) -> None: ...


class AttachmentStore:
    """DuckDB-backed metadata store.

    ``prefetch`` loads many attachments with one query and keeps them for the
    following ``get_attachment_metadata`` calls. Lookups work the same whether
    or not a prefetch happened.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self.conn = conn
        self._cache: dict[int, ImageMetadata | None] = {}

    def get_attachment_metadata(self, attachment_id: int) -> ImageMetadata | None:
        if attachment_id not in self._cache:
            self._cache[attachment_id] = get_attachment(self.conn, attachment_id)
        return self._cache[attachment_id]

    def prefetch(self, attachment_ids: Iterable[int]) -> None:
        missing = [i for i in attachment_ids if i not in self._cache]
        if not missing:
            return
        try:
            found = get_attachments(self.conn, missing)
        except duckdb.Error as e:
            log.warning("Prefetch of %d attachments failed: %s", len(missing), e)
            return
        for attachment_id in missing:
            self._cache[attachment_id] = found.get(attachment_id)

    def invalidate(self, attachment_id: int | None = None) -> None:
        """Drop one cached attachment, or the whole cache."""
        if attachment_id is None:
            self._cache.clear()
        else:
            self._cache.pop(attachment_id, None)
