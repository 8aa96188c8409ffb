"""
Lookup sources for the querybind decoder.
"""

from .lookup import Lookup, MappingLookup, QueryStringLookup, SeriesLookup, as_lookup

__all__ = ['Lookup', 'MappingLookup', 'QueryStringLookup', 'SeriesLookup', 'as_lookup']
