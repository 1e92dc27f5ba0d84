"""
Parameter map helpers shared by the signer, the dispatcher and the services.

A parameter map is a plain ``dict`` from field name to value. Values may be
``str``, ``int`` or ``bool``; ``None`` and the :data:`ABSENT` sentinel both mean
"field not supplied" and are dropped before signing and transmission.
"""

from typing import Any, Dict, Mapping, Union


class _Absent:
    """Marker for an optional field that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

ParamValue = Union[str, int, bool, None, _Absent]
ParamMap = Dict[str, ParamValue]


def is_absent(value: Any) -> bool:
    return value is None or value is ABSENT


def to_wire(value: Any) -> str:
    """Render a single value the way the service expects it on the wire."""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def drop_absent(params: Mapping[str, Any] | None) -> Dict[str, str]:
    """Return a new map without absent entries, values rendered as strings."""
    return {k: to_wire(v) for k, v in (params or {}).items() if not is_absent(v)}


def flag(value: bool) -> int:
    """Boolean options such as ``autocorrect`` are sent as 0/1."""
    return 1 if value else 0
