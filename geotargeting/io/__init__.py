"""geotargeting I/O helpers: lookup cache and campaign record adapter."""

from geotargeting.io.cache import LookupCache
from geotargeting.io.records import polygon_centroid, shape_from_record

__all__ = ["LookupCache", "polygon_centroid", "shape_from_record"]
