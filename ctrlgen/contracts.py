# File: ctrlgen/contracts.py
"""
ctrlgen - Controller method capabilities.

A concrete controller method declares what it generates by inheriting one
of these abstract bases:

    ViewAbleMethod      -> ``generate_view_code()``
    RedirectAbleMethod  -> ``generate_redirect_able_code()``
    ApiResponseMethod   -> marker; request classes come from the API root

The generation mode is resolved once per class.  When a class inherits
both generation capabilities, the view capability wins.
"""

from __future__ import annotations

import abc
from enum import Enum


class ViewAbleMethod(abc.ABC):
    """Generates a method that renders a view (or, for APIs, a response body)."""

    @abc.abstractmethod
    def generate_view_code(self) -> str:
        ...


class RedirectAbleMethod(abc.ABC):
    """Generates a method that performs a write and redirects."""

    @abc.abstractmethod
    def generate_redirect_able_code(self) -> str:
        ...


class ApiResponseMethod(abc.ABC):
    """Marker for methods of API controllers."""


class GenerationMode(str, Enum):
    """Which generation strategy a controller method uses."""

    VIEW = "view"
    REDIRECT = "redirect"
    NONE = "none"


def resolve_generation_mode(cls: type) -> GenerationMode:
    if issubclass(cls, ViewAbleMethod):
        return GenerationMode.VIEW
    if issubclass(cls, RedirectAbleMethod):
        return GenerationMode.REDIRECT
    return GenerationMode.NONE


def is_api_response(cls: type) -> bool:
    return issubclass(cls, ApiResponseMethod)
