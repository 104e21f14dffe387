"""geotargeting external API clients."""

from geotargeting.clients.nominatim_client import NominatimClient

__all__ = ["NominatimClient"]
