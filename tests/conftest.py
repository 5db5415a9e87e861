"""
tests/conftest.py
Shared fixtures for the ctrlgen test suite.

Sample models are real SQLAlchemy 2.0 declarative classes; the
class-existence oracle is replaced by a recording fake so tests decide
which custom request classes "exist".
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set

import pytest
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ctrlgen.models import GeneratorConfig


# ---------------------------------------------------------------------------
# Sample models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    headline: Mapped[str] = mapped_column(String(200))


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id"))
    body: Mapped[str] = mapped_column(Text)


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    parent_category_id: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.id"))
    name: Mapped[str] = mapped_column(String(100))


class LegacyRecord:
    """Not mapped; exposes its table through ``get_table()`` only."""

    def get_table(self) -> str:
        return "legacy_records"


class Opaque:
    """No table metadata at all."""


# ---------------------------------------------------------------------------
# Class-existence oracle
# ---------------------------------------------------------------------------


class FakeClassRegistry:
    """Callable oracle answering True only for the registered names."""

    def __init__(self, existing: Iterable[str] = ()) -> None:
        self.existing: Set[str] = set(existing)
        self.queries: List[str] = []

    def add(self, name: str) -> None:
        self.existing.add(name)

    def __call__(self, qualified_name: str) -> bool:
        self.queries.append(qualified_name)
        return qualified_name in self.existing


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def qualified(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def is_valid_method(code: str) -> bool:
    """Check that generated (class-member indented) code compiles inside a class."""
    try:
        compile(f"class Controller:\n{code}\n", "<generated>", "exec")
        return True
    except SyntaxError:
        return False


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def registry() -> FakeClassRegistry:
    """An oracle under which no custom request class exists."""
    return FakeClassRegistry()


@pytest.fixture()
def config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture()
def scenario_config() -> GeneratorConfig:
    return GeneratorConfig.from_dict({
        "request": {
            "namespace": "app.http.requests",
            "apiNamespace": "app.http.api_requests",
            "classSuffix": "Request",
        },
    })


@pytest.fixture()
def rooted_config() -> GeneratorConfig:
    return GeneratorConfig.from_dict({
        "rootNamespace": "shop",
        "request": {"namespace": "http.requests", "apiNamespace": "shop.api.requests"},
    })
