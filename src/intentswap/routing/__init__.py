"""Address routing and quoting."""

from intentswap.routing.addresses import AddressPair, Identities, route_addresses
from intentswap.routing.quote_engine import QuoteEngine, QuoteParams

__all__ = [
    "AddressPair",
    "Identities",
    "QuoteEngine",
    "QuoteParams",
    "route_addresses",
]
