"""
Resolution Package
"""
from .query_resolver import (
    QueryResolver,
    get_searcher,
    get_resolver,
    resolve,
    additional_names
)

__all__ = [
    'QueryResolver',
    'get_searcher',
    'get_resolver',
    'resolve',
    'additional_names'
]
