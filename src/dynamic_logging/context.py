import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Mapping, Optional

_EMPTY: Mapping[str, Any] = MappingProxyType({})

context_data: ContextVar[Mapping[str, Any]] = ContextVar("context_data", default=_EMPTY)


def get_context() -> Mapping[str, Any]:
    """Get a read-only view of the current context"""
    return context_data.get(_EMPTY)


def _replace(data: dict) -> None:
    context_data.set(MappingProxyType(data))


def get(key: str, default: Any = None) -> Any:
    """Get a single context value"""
    return get_context().get(key, default)


def put(key: str, value: Any) -> None:
    """Set a context value for the current thread or task"""
    current = dict(get_context())
    current[key] = value
    _replace(current)


def put_all(**fields: Any) -> None:
    """Set several context values at once"""
    current = dict(get_context())
    current.update(fields)
    _replace(current)


def remove(key: str) -> None:
    """Remove a context value if present"""
    current = get_context()
    if key in current:
        updated = dict(current)
        del updated[key]
        _replace(updated)


def clear() -> None:
    """Drop every value in the current context"""
    context_data.set(_EMPTY)


@contextmanager
def context_scope(**fields: Any) -> Generator[Mapping[str, Any], None, None]:
    """Context manager adding fields for the duration of a block"""
    token = context_data.set(MappingProxyType({**get_context(), **fields}))
    try:
        yield get_context()
    finally:
        context_data.reset(token)


@contextmanager
def request_context(
    request_id: Optional[str] = None, **fields: Any
) -> Generator[str, None, None]:
    """Context manager for setting up request-scoped logging context"""
    req_id = request_id or str(uuid.uuid4())

    with context_scope(request_id=req_id, **fields):
        yield req_id
