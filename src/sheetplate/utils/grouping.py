"""
Grouping of collection items by a property value.

Used by templates that repeat an area once per distinct value of a property
(e.g. one block per department) instead of once per item.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

import pandas as pd

from sheetplate.utils.properties import get_object_property


logger = logging.getLogger(__name__)

NULL_GROUP_KEY = "null"


@dataclass
class GroupData:
    """One group of items sharing the same property value.

    Attributes:
        item: The first item of the group, used to read the group's key
        items: All items of the group, in collection order
    """
    item: Any
    items: List[Any] = field(default_factory=list)


def _group_key(item: Any, group_property: str) -> Any:
    value = get_object_property(item, group_property, fail_silently=True)
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return NULL_GROUP_KEY
    return value


def _ordered_keys(keys: List[Any], group_order: Optional[str]) -> List[Any]:
    unique = list(dict.fromkeys(keys))
    if group_order is None:
        return unique
    return sorted(unique, reverse=group_order.lower() == "desc")


def group_collection(
    collection: Optional[Iterable[Any]],
    group_property: str,
    group_order: Optional[str] = None,
) -> List[GroupData]:
    """Group items of a collection by the value of a property.

    Items whose property is missing, None or NaN (an empty DataFrame cell)
    are grouped under the key "null".

    Args:
        collection: Items to group; a pandas DataFrame is grouped row-wise,
            each row as a dictionary
        group_property: Name of the property to group by
        group_order: None keeps the order in which keys first appear, "desc"
            sorts keys in descending order, any other value ascending

    Returns:
        List of GroupData, one per distinct key

    Raises:
        TypeError: If keys must be sorted but are not mutually comparable
    """
    if collection is None:
        return []
    if isinstance(collection, pd.DataFrame):
        items = collection.to_dict(orient='records')
    else:
        items = list(collection)

    keys = [_group_key(item, group_property) for item in items]
    groups: List[GroupData] = []
    for group_value in _ordered_keys(keys, group_order):
        group_items = [item for item, key in zip(items, keys) if key == group_value]
        if group_items:
            groups.append(GroupData(group_items[0], group_items))

    logger.debug("Grouped %d items by '%s' into %d groups", len(items), group_property, len(groups))
    return groups


group_iterable = group_collection
