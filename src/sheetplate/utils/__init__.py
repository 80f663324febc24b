"""
Utility functions for sheetplate.

This module provides helpers used around template processing:
- properties: reading and writing named properties of objects and mappings
- grouping: grouping collection items by a property value
- io: reading binary streams
"""

from .properties import get_object_property, set_object_property
from .grouping import GroupData, group_collection, group_iterable, NULL_GROUP_KEY
from .io import to_byte_array

__all__ = [
    'get_object_property',
    'set_object_property',
    'GroupData',
    'group_collection',
    'group_iterable',
    'NULL_GROUP_KEY',
    'to_byte_array',
]
