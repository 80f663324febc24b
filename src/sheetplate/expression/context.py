"""
Variable context for template expressions.
"""

from typing import Any, Dict, Iterator, Optional


class Context:
    """Named variables visible to template expressions.

    A Context wraps a plain dictionary. Expressions are evaluated against
    ``to_dict()``; the template engine adds and removes loop variables as it
    walks a collection.

    Attributes:
        vars: The underlying variable dictionary
    """

    def __init__(self, variables: Optional[Dict[str, Any]] = None) -> None:
        self.vars: Dict[str, Any] = dict(variables) if variables else {}

    def get_var(self, name: str) -> Any:
        """Return the value of ``name``, or None if it is not defined."""
        return self.vars.get(name)

    def put_var(self, name: str, value: Any) -> None:
        self.vars[name] = value

    def contains_var(self, name: str) -> bool:
        return name in self.vars

    def remove_var(self, name: str) -> None:
        """Remove ``name`` if it is defined; missing names are ignored."""
        self.vars.pop(name, None)

    def to_dict(self) -> Dict[str, Any]:
        return self.vars

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def __repr__(self) -> str:
        return f"Context({self.vars!r})"
