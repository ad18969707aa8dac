"""Shared fixtures for model-ui tests."""

from datetime import date

import pytest

from model_ui.builder import FieldTreeBuilder
from model_ui.config import ModelUIConfig
from model_ui.metadata import MetadataStore
from agents.tracing import set_trace_processors

from model_ui.tracing import setup_tracing

from sample_models import Address, Contact, Person, describe_contact, describe_person


@pytest.fixture
def store():
    """A fresh metadata store per test."""
    return MetadataStore()


@pytest.fixture
def config():
    return ModelUIConfig()


@pytest.fixture
def builder(store, config):
    return FieldTreeBuilder(store=store, config=config)


@pytest.fixture
def contact_store(store):
    describe_contact(store)
    return store


@pytest.fixture
def person_store(store):
    describe_person(store)
    return store


@pytest.fixture
def contact():
    return Contact(id=7, name="Alice Smith", email="alice@example.com")


@pytest.fixture
def person():
    return Person(
        id=101,
        name="Alice Smith",
        email="alice@example.com",
        age=30,
        birthday=date(1990, 5, 17),
        address=Address(street="Main Street", city="Lisbon", zip_code="12345"),
    )


@pytest.fixture(autouse=True)
def no_tracing():
    """Leave tracing off between tests."""
    yield
    setup_tracing(enabled=False)
    set_trace_processors([])
