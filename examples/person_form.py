#!/usr/bin/env python3
"""
Person Form Example

Annotates a small model, builds its field tree for two operations and
exports the JSON Schema form configuration.

Usage:
    python examples/person_form.py
"""

import json
import sys
from datetime import date
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pydantic import BaseModel, EmailStr, Field

from model_ui import (
    CrudOperation,
    FieldTreeEngine,
    JSONSchemaEngine,
    RenderingEngineRegistry,
    describe,
)
from model_ui.tracing import setup_tracing


class Address(BaseModel):
    street: str = Field(min_length=3)
    city: str


class Person(BaseModel):
    id: int | None = None
    name: str = Field(min_length=5)
    email: EmailStr
    birthday: date | None = None
    address: Address | None = None


(describe(Address)
    .model("address-form")
    .element("street", "text-field", {"label": "Street"})
    .element("city", "text-field", {"label": "City"}))

(describe(Person)
    .model("person-form", {"title": "Person"}, pk="id")
    .handlers(onSubmit="save-person")
    .element("id", "text-field")
    .element("name", "text-field", {"label": "Full name"})
    .element("email", "text-field", {"label": "Email"})
    .element("birthday", "date-field", {"label": "Birthday"})
    .child("address", "fieldset", {"legend": "Address"})
    .hidden("id", CrudOperation.CREATE)
    .order("email", 0)
    .validate("name", "different", "email"))


def main():
    setup_tracing(console=True, verbose=True)

    registry = RenderingEngineRegistry()
    registry.register(JSONSchemaEngine)
    registry.register(FieldTreeEngine)

    person = Person(
        id=42,
        name="Ada Lovelace",
        email="ada@example.com",
        birthday=date(1815, 12, 10),
    )

    for operation in (CrudOperation.CREATE, CrudOperation.UPDATE):
        tree = registry.render_model(person, {"operation": operation.value})
        print(f"\n{operation.value}: {[child.path for child in tree.children]}")

    schema = registry.get("json-schema").render_json(person)
    print("\n" + schema)

    print("\n" + json.dumps(registry.get("tree").render(person).to_dict(), indent=2, default=str))


if __name__ == "__main__":
    main()
