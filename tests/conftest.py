"""Pytest configuration and fixtures for C4Viz tests."""

import json

import pytest

from c4viz.core.models import (
    Container,
    ExternalSystem,
    ExternalUser,
    InternalSystem,
    InternalUser,
    Model,
    Usage,
)


@pytest.fixture
def simple_model():
    """One system with a web app and a database, used by one external user."""
    return Model(
        internal_systems=(
            InternalSystem(
                id="s",
                name="S",
                description="The system",
                containers=(
                    Container(
                        id="web",
                        name="Web",
                        description="Web application",
                        usages=(Usage("db", "reads/writes"),),
                    ),
                    Container(id="db", name="DB", description="Database"),
                ),
            ),
        ),
        external_users=(
            ExternalUser(
                id="u",
                name="U",
                description="A visitor",
                usages=(Usage("web", "browses"),),
            ),
        ),
    )


@pytest.fixture
def shop_model():
    """Two internal systems, an external system and both kinds of users."""
    return Model(
        internal_systems=(
            InternalSystem(
                id="shop",
                name="Web Shop",
                containers=(
                    Container(
                        id="shop-web",
                        name="Storefront",
                        type="Django",
                        usages=(
                            Usage("shop-db", "reads orders", "SQL"),
                            Usage("shop-db", "writes orders", "SQL"),
                            Usage("billing-api", "charges cards", "HTTPS"),
                            Usage("billing-db", "reads invoices"),
                        ),
                    ),
                    Container(id="shop-db", name="Orders", type="PostgreSQL"),
                ),
            ),
            InternalSystem(
                id="billing",
                name="Billing",
                description="Invoicing",
                containers=(
                    Container(
                        id="billing-api",
                        name="Billing API",
                        usages=(
                            Usage("billing-db", "stores invoices"),
                            Usage("psp", "captures payments"),
                        ),
                    ),
                    Container(
                        id="billing-worker",
                        name="Invoice Worker",
                        usages=(Usage("shop-db", "reads order history"),),
                    ),
                    Container(id="billing-db", name="Billing DB"),
                ),
            ),
        ),
        external_systems=(
            ExternalSystem(
                id="psp",
                name="Payment Provider",
                usages=(Usage("billing-api", "posts webhooks"),),
            ),
            ExternalSystem(id="mailer", name="Mail Service"),
        ),
        internal_users=(
            InternalUser(
                id="support",
                name="Support Agent",
                usages=(
                    Usage("shop-web", "looks up orders"),
                    Usage("mailer", "reads mail"),
                ),
            ),
        ),
        external_users=(
            ExternalUser(
                id="customer",
                name="Customer",
                usages=(Usage("shop-web", "browses", "HTTPS"),),
            ),
        ),
    )


@pytest.fixture
def model_document():
    """A model document as it appears on disk."""
    return {
        "internalSystems": [
            {
                "id": "s",
                "name": "S",
                "description": "The system",
                "containers": [
                    {
                        "id": "web",
                        "name": "Web",
                        "type": "Python",
                        "uses": [{"target": "db", "for": "reads/writes", "type": "SQL"}],
                    },
                    {"id": "db", "name": "DB"},
                ],
            },
            {
                "id": "other",
                "name": "Other",
                "containers": [
                    {"id": "other-api", "name": "Other API", "uses": [{"target": "web", "for": "calls"}]},
                ],
            },
        ],
        "externalUsers": [
            {"id": "u", "name": "U", "uses": [{"target": "web", "for": "browses"}]},
        ],
    }


@pytest.fixture
def model_file(tmp_path, model_document):
    """Path to a model document written to a temporary directory."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(model_document), encoding="utf-8")
    return path
