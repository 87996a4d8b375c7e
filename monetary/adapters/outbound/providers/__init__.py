from .caching_provider import CachingRateProvider
from .composite_provider import CompositeRateProvider
from .static_provider import StaticRateProvider

__all__ = [
    "CachingRateProvider",
    "CompositeRateProvider",
    "StaticRateProvider",
]
