# File: ctrlgen/introspection.py
"""
ctrlgen - Model Introspection
==============================
Wraps a model (a SQLAlchemy mapped class or instance, or any object that
exposes ``get_table()`` / ``__tablename__``) and exposes the metadata the
method descriptors need: table name, qualified type name and short name.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect

from ctrlgen.errors import ReflectionError
from ctrlgen.utils import short_name

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.introspection")


def qualified_name_of(obj: Any) -> str:
    """``module.QualName`` of a class, or of an instance's class."""
    cls: type = obj if isinstance(obj, type) else type(obj)
    module: Optional[str] = getattr(cls, "__module__", None)
    qualname: str = getattr(cls, "__qualname__", cls.__name__)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def _mapped_table_name(cls: type) -> Optional[str]:
    mapper: Any = sa_inspect(cls, raiseerr=False)
    table: Any = getattr(mapper, "local_table", None)
    name: Any = getattr(table, "name", None)
    return name if isinstance(name, str) and name else None


class ModelIntrospector:
    """
    Read-only view over a model's type metadata.

    The table name is resolved eagerly so an unusable model fails at
    construction; the short name is computed on first use and cached.
    """

    __slots__ = ("_model", "_cls", "_table_name", "_qualified_name", "_short_name")

    def __init__(self, model: Any) -> None:
        if model is None:
            raise ReflectionError("Cannot introspect a model of type None.")
        self._model: Any = model
        self._cls: type = model if isinstance(model, type) else type(model)
        self._table_name: str = self._resolve_table_name()
        self._qualified_name: str = qualified_name_of(self._cls)
        self._short_name: Optional[str] = None
        logger.debug(
            "Introspected model %s (table=%s).",
            self._qualified_name,
            self._table_name,
        )

    def _resolve_table_name(self) -> str:
        name: Optional[str] = _mapped_table_name(self._cls)
        if name:
            return name

        value: Any = getattr(self._cls, "__tablename__", None)
        if isinstance(value, str) and value:
            return value

        getter: Any = getattr(self._model, "get_table", None)
        if callable(getter):
            try:
                value = getter()
            except TypeError as exc:
                raise ReflectionError(
                    f"{self._cls.__qualname__}.get_table() cannot be called "
                    f"on {self._model!r}: {exc}"
                ) from exc
            if isinstance(value, str) and value:
                return value

        raise ReflectionError(
            f"Cannot determine the table of {self._cls.__qualname__}: it is not "
            "a mapped SQLAlchemy model and defines neither get_table() nor "
            "__tablename__."
        )

    @property
    def model(self) -> Any:
        return self._model

    def table_name(self) -> str:
        return self._table_name

    def qualified_name(self) -> str:
        return self._qualified_name

    def class_name(self) -> str:
        return self._cls.__name__

    def short_name(self) -> str:
        """Class name without its module, first letter lower-cased (cached)."""
        if self._short_name is None:
            self._short_name = short_name(self._qualified_name)
        return self._short_name

    def __repr__(self) -> str:
        return f"<ModelIntrospector {self._qualified_name} table={self._table_name}>"
