"""Attribute map strategies.

``MapStrategy.ORDERED`` stores attributes in a plain ``dict`` and iterates in
insertion order. ``MapStrategy.HASHED`` stores them in :class:`HashedAttributes`,
which iterates in key-hash order; with randomised string hashing that order is
unspecified between interpreter runs.
"""

from typing import Any, Dict, Iterator, List, MutableMapping, Optional

from loose_xml.shared.config import MapStrategy

AttributeMap = MutableMapping[Any, Any]


class HashedAttributes(MutableMapping):
    """Attribute mapping that iterates in key-hash order.

    This emulates the iteration order of a hash map so that callers cannot come
    to depend on attribute order. It is not faster than a ``dict``: lookups cost
    the same, and the hash order is sorted once and cached until the next
    insertion or removal of a key.
    """

    __slots__ = ("_data", "_order")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._data: Dict[Any, Any] = {}
        self._order: Optional[List[Any]] = None
        self.update(*args, **kwargs)

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        if key not in self._data:
            self._order = None
        # Last write wins, but the first key object is kept
        self._data[key] = value

    def __delitem__(self, key: Any) -> None:
        del self._data[key]
        self._order = None

    def __iter__(self) -> Iterator[Any]:
        if self._order is None:
            self._order = sorted(self._data, key=hash)
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        items = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"HashedAttributes({{{items}}})"


def new_attribute_map(strategy: MapStrategy = MapStrategy.ORDERED) -> AttributeMap:
    """Create an empty attribute map for ``strategy``."""
    if strategy is MapStrategy.HASHED:
        return HashedAttributes()
    return {}


def strategy_of(attributes: AttributeMap) -> MapStrategy:
    """Return the strategy an existing attribute map was created with."""
    if isinstance(attributes, HashedAttributes):
        return MapStrategy.HASHED
    return MapStrategy.ORDERED
