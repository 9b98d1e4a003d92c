"""Shared fixtures."""

from __future__ import annotations

import pytest

from eloquent_generics.indexer import PhpIndexer
from eloquent_generics.rules.eloquent_generic_rule import EloquentGenericRule


@pytest.fixture(scope="session")
def indexer():
    # building the parser loads the grammar, do it once
    return PhpIndexer()


@pytest.fixture
def rule():
    return EloquentGenericRule()
