import dataclasses
import json
from typing import Any, Mapping

from pydantic import BaseModel


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=stable_stringify)
    raise TypeError(f"Object of type {type(obj).__name__} is not serializable")


def _number(value: float) -> int | float:
    # 1.0 and 1 are the same JSON number
    return int(value) if value.is_integer() else value


def _key(key: Any) -> str:
    """Render a mapping key the way JSON does: always a string."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool) or key is None:
        return json.dumps(key)
    if isinstance(key, float):
        return str(_number(key))
    if isinstance(key, int):
        return str(key)
    raise TypeError(f"Keys must be str, int, float, bool or None, not {type(key).__name__}")


def _normalize(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return _number(value)
    if isinstance(value, Mapping):
        return {_key(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return _normalize(_default(value))


def stable_stringify(value: Any) -> str:
    """
    Deterministic JSON rendering of `value`.

    Object keys are sorted at every depth, so two mappings with the same
    items produce the same string whatever their insertion order. Array
    order is preserved. The output only depends on the value, never on
    the process, so it is stable across restarts.

    Values are compared as JSON compares them: keys become strings before
    sorting, so mixed key types are fine, and a float with an integral
    value renders like the equal int.
    """
    return json.dumps(
        _normalize(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def canonicalize(method_name: str, params: Any) -> str:
    """Key identifying a logical subscription by method and parameters."""
    return stable_stringify([method_name, params])
