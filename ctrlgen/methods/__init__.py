# File: ctrlgen/methods/__init__.py
"""
Bundled controller methods and the name -> class registry.

    resolve_method_class("store")            -> ctrlgen.methods.web.Store
    resolve_method_class("store", api=True)  -> ctrlgen.methods.api.Store
"""

from __future__ import annotations

from typing import Dict, List, Type

from ctrlgen.errors import UnknownMethodError
from ctrlgen.method import ControllerMethod
from ctrlgen.methods import api as api_methods
from ctrlgen.methods import web as web_methods
from ctrlgen.methods.base import ResourceMethod, ResourceNames

WEB_METHODS: Dict[str, Type[ControllerMethod]] = {
    "index": web_methods.Index,
    "show": web_methods.Show,
    "create": web_methods.Create,
    "store": web_methods.Store,
    "edit": web_methods.Edit,
    "update": web_methods.Update,
    "destroy": web_methods.Destroy,
}

API_METHODS: Dict[str, Type[ControllerMethod]] = {
    "index": api_methods.Index,
    "show": api_methods.Show,
    "store": api_methods.Store,
    "update": api_methods.Update,
    "destroy": api_methods.Destroy,
}


def available_methods(api: bool = False) -> List[str]:
    """Registered method names in conventional resource order."""
    return list(API_METHODS if api else WEB_METHODS)


def resolve_method_class(name: str, api: bool = False) -> Type[ControllerMethod]:
    registry: Dict[str, Type[ControllerMethod]] = API_METHODS if api else WEB_METHODS
    try:
        return registry[name.strip().lower()]
    except KeyError:
        raise UnknownMethodError(name, api) from None


__all__: List[str] = [
    "API_METHODS",
    "WEB_METHODS",
    "ResourceMethod",
    "ResourceNames",
    "available_methods",
    "resolve_method_class",
]
