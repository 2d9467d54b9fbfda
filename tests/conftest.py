"""Shared pytest fixtures for orm-json-schema tests."""

from __future__ import annotations

from typing import Generator

import pytest

from orm_json_schema.config import get_settings
from orm_json_schema.infrastructure.schema import (
    AssociationDef,
    AssociationKind,
    AttributeDef,
    ColumnType,
    ModelDef,
    ModelRegistry,
)


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def author_model() -> ModelDef:
    """Author with a has-many to Post and a has-one to Profile."""
    return ModelDef(
        name="Author",
        attributes=[
            AttributeDef("id", ColumnType.INTEGER, allow_null=False),
            AttributeDef("name", ColumnType.STRING, allow_null=False, length=100),
            AttributeDef("bio", ColumnType.TEXT, length="medium"),
        ],
        associations=[
            AssociationDef(AssociationKind.HAS_MANY, "Post", "posts"),
            AssociationDef(AssociationKind.HAS_ONE, "Profile", "profile"),
        ],
    )


@pytest.fixture
def post_model() -> ModelDef:
    """Post belonging to an Author through author_id."""
    return ModelDef(
        name="Post",
        attributes=[
            AttributeDef("id", ColumnType.BIGINT, allow_null=False),
            AttributeDef("title", ColumnType.STRING, allow_null=False, length="tiny"),
            AttributeDef("author_id", ColumnType.INTEGER, allow_null=False),
            AttributeDef(
                "tags",
                ColumnType.ARRAY,
                inner_type=AttributeDef("tags", ColumnType.STRING, length=40),
            ),
        ],
        associations=[
            AssociationDef(AssociationKind.BELONGS_TO, "Author", "author", "author_id"),
        ],
    )


@pytest.fixture
def registry(author_model: ModelDef, post_model: ModelDef) -> ModelRegistry:
    return ModelRegistry([author_model, post_model])
