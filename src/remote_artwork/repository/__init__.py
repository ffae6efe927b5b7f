"""Remote artwork repository access."""

from remote_artwork.repository.catalog import CatalogCache

__all__ = ["CatalogCache"]
