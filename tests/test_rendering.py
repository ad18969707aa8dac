"""Tests for rendering engines and the engine registry."""

import asyncio
import json
import logging
import threading
from typing import Any

import pytest
from pydantic import BaseModel

from model_ui.config import ModelUIConfig
from model_ui.errors import DuplicateFlavour, UnknownFlavour
from model_ui.metadata import describe
from model_ui.models.field_definition import FieldDefinition
from model_ui.models.schema_output import GeneratedFormSchema
from model_ui.rendering import (
    FieldTreeEngine,
    JSONSchemaEngine,
    Renderable,
    RenderingEngine,
    RenderingEngineRegistry,
)
from model_ui.rendering import registry as registry_module

from sample_models import Person


class SlowEngine(RenderingEngine):
    """Engine whose initialization yields to the event loop."""

    flavour = "slow"

    async def initialize(self, *args: Any, **kwargs: Any) -> None:
        await asyncio.sleep(0)

    def render(self, model, context_props=None, *args, **kwargs):
        return self.flavour


class FailingEngine(RenderingEngine):
    """Engine whose initialization fails."""

    flavour = "failing"

    async def initialize(self, *args: Any, **kwargs: Any) -> None:
        raise RuntimeError("no templates")

    def render(self, model, context_props=None, *args, **kwargs):
        return None


class RegisteringEngine(RenderingEngine):
    """Engine that registers another engine from a worker thread while it initializes."""

    flavour = "registering"
    registry: RenderingEngineRegistry | None = None

    async def initialize(self, *args: Any, **kwargs: Any) -> None:
        worker = threading.Thread(target=self.registry.register, args=(FieldTreeEngine,))
        worker.start()
        worker.join(timeout=2)
        self.registry_was_free = not worker.is_alive()

    def render(self, model, context_props=None, *args, **kwargs):
        return None


class Badge(Renderable, BaseModel):
    code: str = "B-1"


@pytest.fixture
def registry(builder, config):
    return RenderingEngineRegistry(builder=builder, config=config)


class TestRenderingEngine:
    """Tests for engine initialization."""

    def test_boot_without_event_loop(self, builder):
        """Without a running loop, booting completes initialization."""
        engine = SlowEngine(builder)
        assert engine.initialized is False

        engine.boot()

        assert engine.initialized is True

    def test_boot_inside_event_loop_is_not_awaited(self, builder):
        """Inside a running loop, booting only schedules initialization."""

        async def scenario():
            engine = SlowEngine(builder)
            engine.boot()
            assert engine.initialized is False
            await engine.wait_initialized()
            assert engine.initialized is True

        asyncio.run(scenario())

    def test_wait_initialized_starts_initialization(self, builder):
        async def scenario():
            engine = SlowEngine(builder)
            await engine.wait_initialized()
            return engine.initialized

        assert asyncio.run(scenario()) is True

    def test_failed_scheduled_initialize_is_logged(self, builder, caplog):
        async def scenario():
            engine = FailingEngine(builder)
            engine.boot()
            for _ in range(3):
                await asyncio.sleep(0)
            return engine

        with caplog.at_level(logging.ERROR, logger="model_ui"):
            engine = asyncio.run(scenario())

        assert engine.initialized is False
        assert "failing rendering engine failed to initialize" in caplog.text
        assert "no templates" in caplog.text

    def test_to_field_definition(self, builder, person_store, person):
        tree = FieldTreeEngine(builder).to_field_definition(person, {"operation": "read"})
        assert isinstance(tree, FieldDefinition)
        assert tree.props["operation"] == "read"


class TestRegistry:
    """Tests for RenderingEngineRegistry."""

    def test_get_boots_registered_class(self, registry):
        registry.register(FieldTreeEngine)

        engine = registry.get("tree")

        assert isinstance(engine, FieldTreeEngine)
        assert engine.initialized is True
        assert engine.builder is registry.builder

    def test_get_caches_instance(self, registry):
        registry.register(FieldTreeEngine)
        assert registry.get("tree") is registry.get("tree")

    def test_register_instance(self, registry, builder):
        engine = JSONSchemaEngine(builder)
        registry.register(engine)
        assert registry.get("json-schema") is engine

    def test_duplicate_flavour(self, registry):
        registry.register(FieldTreeEngine)
        with pytest.raises(DuplicateFlavour, match="tree"):
            registry.register(FieldTreeEngine)

    def test_unknown_flavour(self, registry):
        registry.register(FieldTreeEngine)
        with pytest.raises(UnknownFlavour, match="vue"):
            registry.get("vue")

    def test_unknown_flavour_is_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.get("vue")

    def test_no_default(self, registry):
        with pytest.raises(UnknownFlavour):
            registry.get()

    def test_last_registration_is_default(self, registry):
        registry.register(FieldTreeEngine)
        registry.register(JSONSchemaEngine)

        assert isinstance(registry.get(), JSONSchemaEngine)
        assert registry.flavours == ["tree", "json-schema"]

    def test_configured_default(self, builder):
        registry = RenderingEngineRegistry(builder=builder, config=ModelUIConfig(default_flavour="tree"))
        registry.register(FieldTreeEngine)
        registry.register(JSONSchemaEngine)

        assert isinstance(registry.get(), FieldTreeEngine)

    def test_render_model_uses_default(self, registry, person_store, person):
        registry.register(FieldTreeEngine)

        tree = registry.render_model(person, {"operation": "create"})

        assert isinstance(tree, FieldDefinition)
        assert tree.tag == "person-form"

    def test_render_model_uses_declared_flavour(self, registry, person_store, person):
        describe(Person, person_store).model("person-form", pk="id", rendered_by="json-schema")
        registry.register(JSONSchemaEngine)
        registry.register(FieldTreeEngine)

        assert isinstance(registry.render_model(person), GeneratedFormSchema)

    def test_render_model_unknown_declared_flavour(self, registry, person_store, person):
        describe(Person, person_store).model("person-form", rendered_by="vue")
        registry.register(FieldTreeEngine)

        with pytest.raises(UnknownFlavour):
            registry.render_model(person)

    def test_boot_runs_outside_lock(self, registry, monkeypatch):
        """Other threads can use the registry while an engine initializes."""
        monkeypatch.setattr(RegisteringEngine, "registry", registry)
        registry.register(RegisteringEngine)

        engine = registry.get("registering")

        assert engine.initialized is True
        assert engine.registry_was_free is True
        assert "tree" in registry.flavours


class TestRenderable:
    """Tests for models that render themselves."""

    @pytest.fixture
    def badge_store(self, store):
        describe(Badge, store).model("badge-card").element("code", "text-field")
        return store

    def test_render_with_default_flavour(self, registry, badge_store):
        registry.register(FieldTreeEngine)

        tree = Badge().render({"operation": "read"}, registry=registry)

        assert isinstance(tree, FieldDefinition)
        assert tree.tag == "badge-card"
        assert tree.props["operation"] == "read"

    def test_render_with_declared_flavour(self, registry, badge_store):
        describe(Badge, badge_store).model("badge-card", rendered_by="json-schema")
        registry.register(JSONSchemaEngine)
        registry.register(FieldTreeEngine)

        schema = Badge().render(registry=registry)

        assert isinstance(schema, GeneratedFormSchema)
        assert schema.component == "badge-card"

    def test_render_with_process_registry(self, registry, badge_store, monkeypatch):
        monkeypatch.setattr(registry_module, "_default_registry", registry)
        registry.register(FieldTreeEngine)

        assert Badge(code="B-9").render().find("code").props["value"] == "B-9"

    def test_default_registry_is_shared(self):
        assert registry_module.get_registry() is registry_module.get_registry()


class TestFieldTreeEngine:
    """Tests for the tree flavour."""

    def test_render(self, builder, person_store, person):
        tree = FieldTreeEngine(builder).render(person, {"operation": "update"})
        assert tree.renderer_id == "Person-101"
        assert tree.find("address.city").props["value"] == "Lisbon"


class TestJSONSchemaEngine:
    """Tests for the json-schema flavour."""

    @pytest.fixture
    def schema(self, builder, person_store, person):
        return JSONSchemaEngine(builder).render(person)

    def test_form_metadata(self, schema):
        assert schema.form_id == "Person-101"
        assert schema.title == "Person"
        assert schema.component == "person-form"

    def test_json_schema(self, schema):
        json_schema = schema.to_json_schema()
        properties = json_schema["properties"]

        assert list(properties) == ["id", "name", "email", "age", "birthday", "active", "address"]
        assert json_schema["required"] == ["name", "email"]
        assert properties["name"]["minLength"] == 5
        assert properties["name"]["title"] == "Full name"
        assert properties["email"]["format"] == "email"
        assert properties["age"]["minimum"] == 0
        assert properties["active"]["type"] == "boolean"
        assert properties["birthday"] == {
            "type": "string",
            "title": "Birthday",
            "format": "date",
            "default": "1990-05-17",
        }

    def test_nested_model(self, schema):
        address = schema.to_json_schema()["properties"]["address"]

        assert address["type"] == "object"
        assert list(address["properties"]) == ["street", "city", "zip_code"]
        assert address["properties"]["zip_code"]["pattern"] == r"^\d{5}$"
        assert address["required"] == ["street", "city"]

    def test_ui_schema(self, schema):
        ui_schema = schema.to_ui_schema()

        assert ui_schema["email"] == {"ui:widget": "email", "ui:component": "text-field"}
        assert ui_schema["address"]["ui:component"] == "address-fieldset"
        assert ui_schema["address"]["city"]["ui:widget"] == "text"

    def test_hidden_fields_are_left_out(self, builder, person_store, person):
        describe(Person, person_store).hidden("id", "create")

        schema = JSONSchemaEngine(builder).render(person, {"operation": "create"})

        assert "id" not in schema.to_json_schema()["properties"]

    def test_render_json(self, builder, person_store, person):
        output = JSONSchemaEngine(builder).render_json(person)
        config = json.loads(output)

        assert config["formId"] == "Person-101"
        assert config["schema"]["properties"]["name"]["default"] == "Alice Smith"
