"""
Reading and writing named properties of arbitrary objects.

Templates refer to data by property name ("employee.name", group by "dept").
Data may be a mapping (dict, pandas row) or any object with attributes.
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from sheetplate.exceptions import PropertyAccessError


logger = logging.getLogger(__name__)


def _read_property(obj: Any, property_name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(property_name)
    return getattr(obj, property_name)


def _write_property(obj: Any, property_name: str, value: Any) -> None:
    if isinstance(obj, MutableMapping):
        obj[property_name] = value
        return
    # Only existing properties can be set; objects are not extended.
    getattr(obj, property_name)
    setattr(obj, property_name, value)


def get_object_property(obj: Any, property_name: str, fail_silently: bool = False) -> Any:
    """Return the value of the named property of ``obj``.

    Mappings are read by key (a missing key gives None); other objects by
    attribute.

    Args:
        obj: Object or mapping to read from
        property_name: Property (attribute or key) name
        fail_silently: Log and return None instead of raising on failure

    Returns:
        The property value

    Raises:
        PropertyAccessError: If the property cannot be read and
            ``fail_silently`` is False
    """
    try:
        return _read_property(obj, property_name)
    except Exception as e:
        msg = f"failed to get property '{property_name}' of object {obj!r}"
        if fail_silently:
            logger.info(msg, exc_info=True)
            return None
        logger.warning(msg)
        raise PropertyAccessError(msg) from e


def set_object_property(obj: Any, property_name: str, value: Any, ignore_non_existing: bool = False) -> None:
    """Set the named property of ``obj`` to ``value``.

    Args:
        obj: Object or mutable mapping to write to
        property_name: Property (attribute or key) name; for objects the
            attribute must already exist
        value: New value
        ignore_non_existing: Log and continue instead of raising on failure

    Raises:
        PropertyAccessError: If the property cannot be set and
            ``ignore_non_existing`` is False
    """
    try:
        _write_property(obj, property_name, value)
    except Exception as e:
        msg = f"failed to set property '{property_name}' to value {value!r} for object {obj!r}"
        if ignore_non_existing:
            logger.info(msg, exc_info=True)
            return
        logger.warning(msg)
        raise PropertyAccessError(msg) from e
