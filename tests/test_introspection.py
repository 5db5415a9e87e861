"""
tests/test_introspection.py
Unit tests for ctrlgen.introspection.ModelIntrospector.
"""

from __future__ import annotations

import pytest

import ctrlgen.introspection as introspection
from ctrlgen.errors import ReflectionError
from ctrlgen.introspection import ModelIntrospector, qualified_name_of

from conftest import BlogPost, Comment, LegacyRecord, Opaque, qualified


class TestTableName:
    def test_mapped_class(self) -> None:
        assert ModelIntrospector(BlogPost).table_name() == "blog_posts"

    def test_mapped_instance(self) -> None:
        assert ModelIntrospector(Comment(body="hi")).table_name() == "comments"

    def test_get_table_on_instance(self) -> None:
        assert ModelIntrospector(LegacyRecord()).table_name() == "legacy_records"

    def test_plain_tablename_attribute(self) -> None:
        Thing = type("Thing", (), {"__tablename__": "things"})
        assert ModelIntrospector(Thing).table_name() == "things"

    def test_no_metadata_raises(self) -> None:
        with pytest.raises(ReflectionError, match="Opaque"):
            ModelIntrospector(Opaque())

    def test_none_raises(self) -> None:
        with pytest.raises(ReflectionError):
            ModelIntrospector(None)

    def test_unbound_get_table_raises(self) -> None:
        # get_table() is an instance method; the class alone cannot answer.
        with pytest.raises(ReflectionError, match="get_table"):
            ModelIntrospector(LegacyRecord)


class TestNames:
    def test_qualified_name(self) -> None:
        info = ModelIntrospector(BlogPost)
        assert info.qualified_name() == qualified(BlogPost)
        assert info.qualified_name().endswith(".BlogPost")

    def test_class_and_instance_agree(self) -> None:
        assert (
            ModelIntrospector(BlogPost).qualified_name()
            == ModelIntrospector(BlogPost(headline="x")).qualified_name()
        )

    def test_short_name(self) -> None:
        assert ModelIntrospector(BlogPost).short_name() == "blogPost"

    def test_class_name(self) -> None:
        assert ModelIntrospector(Comment).class_name() == "Comment"

    def test_short_name_is_memoized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        info = ModelIntrospector(BlogPost)
        first = info.short_name()

        def _boom(_: str) -> str:
            raise AssertionError("short name recomputed")

        monkeypatch.setattr(introspection, "short_name", _boom)
        assert info.short_name() is first

    def test_qualified_name_of_builtin(self) -> None:
        assert qualified_name_of(int) == "int"
