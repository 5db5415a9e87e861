# File: ctrlgen/methods/api.py
"""
ctrlgen - API controller methods.

API methods return pydantic resources (``<Model><suffix>.model_validate``)
instead of rendering templates.  They generate through the view strategy
and take their custom request classes from the API request namespace.
"""

from __future__ import annotations

from typing import List

from ctrlgen.contracts import ApiResponseMethod, ViewAbleMethod
from ctrlgen.methods.base import ResourceMethod, ResourceNames


class ApiMethod(ResourceMethod, ViewAbleMethod, ApiResponseMethod):
    """Helpers shared by the API controller methods."""

    @property
    def resource_class(self) -> str:
        return f"{self.names.model_class}{self.config.api.resource_suffix}"

    def resource_import(self) -> str:
        return self.namespace_resolver.qualify(
            self.namespace_resolver.full_namespace(self.config.api.resource_namespace),
            self.resource_class,
        )

    def before_generate(self) -> "ApiMethod":
        super().before_generate()
        self.add_namespace(self.resource_import())
        return self

    def to_resource(self, var: str) -> str:
        return f"{self.resource_class}.model_validate({var})"


class Index(ApiMethod):
    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        self.add_namespace("typing.List")
        header: List[str] = self.signature(
            self.route_params(with_key=False), f"List[{self.resource_class}]"
        )
        body: List[str] = self.docstring(f"List {n.label.lower()} records.")
        body += self.parent_lookup()
        body += self.collection_lookup()
        body.append(
            f"return [{self.to_resource(n.model_var)} for {n.model_var} in {n.collection_var}]"
        )
        return self.render(header, body)


class Show(ApiMethod):
    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        header: List[str] = self.signature(self.route_params(with_key=True), self.resource_class)
        body: List[str] = self.docstring(f"Return a single {n.label.lower()}.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body.append(f"return {self.to_resource(n.model_var)}")
        return self.render(header, body)


class Store(ApiMethod):
    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        params, decode = self.request_input()
        self.add_namespace("fastapi.Response")
        header: List[str] = self.signature(
            ["response: Response", *self.route_params(with_key=False), *params],
            self.resource_class,
        )
        body: List[str] = self.docstring(f"Create a {n.label.lower()}.")
        body += self.parent_lookup()
        body += decode
        body.append(f"{n.model_var} = {n.model_class}(**data)")
        if n.has_parent:
            body.append(f"{n.model_var}.{n.parent_key} = {n.parent_var}.id")
        body.append(f"db.add({n.model_var})")
        body += self.persist()
        body.append("response.status_code = 201")
        body.append(f"return {self.to_resource(n.model_var)}")
        return self.render(header, body)


class Update(ApiMethod):
    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        params, decode = self.request_input()
        header: List[str] = self.signature(
            [*self.route_params(with_key=True), *params], self.resource_class
        )
        body: List[str] = self.docstring(f"Update a {n.label.lower()}.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body += decode
        body.append("for field, value in data.items():")
        body.append(f"{self._indent}setattr({n.model_var}, field, value)")
        body += self.persist()
        body.append(f"return {self.to_resource(n.model_var)}")
        return self.render(header, body)


class Destroy(ApiMethod):
    def generate_view_code(self) -> str:
        n: ResourceNames = self.names
        self.add_namespace("fastapi.Response")
        header: List[str] = self.signature(self.route_params(with_key=True), "Response")
        body: List[str] = self.docstring(f"Delete a {n.label.lower()}.")
        body += self.parent_lookup()
        body += self.record_lookup()
        body.append(f"await db.delete({n.model_var})")
        body += self.persist(refresh=False)
        body.append("return Response(status_code=204)")
        return self.render(header, body)
