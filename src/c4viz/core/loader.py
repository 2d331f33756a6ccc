"""Loading architecture models from JSON documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .exceptions import ModelLoadError
from .models import (
    Container,
    ExternalSystem,
    ExternalUser,
    InternalSystem,
    InternalUser,
    Model,
    Usage,
)

logger = logging.getLogger(__name__)


class _DocumentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class UsageDocument(_DocumentModel):
    """A usage as written in a model document."""

    target: str
    purpose: str = Field(default="", alias="for")
    type: str | None = None

    def to_usage(self) -> Usage:
        return Usage(target_id=self.target, purpose=self.purpose, type=self.type or None)


class ElementDocument(_DocumentModel):
    """Fields shared by every element document."""

    id: str = Field(min_length=1)
    name: str
    description: str = ""


class ActorDocument(ElementDocument):
    """External system or user: an element that originates usages."""

    uses: list[UsageDocument] = Field(default_factory=list)

    def usages(self) -> tuple[Usage, ...]:
        return tuple(usage.to_usage() for usage in self.uses)


class ContainerDocument(ActorDocument):
    type: str | None = None

    def to_container(self) -> Container:
        return Container(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type or None,
            usages=self.usages(),
        )


class InternalSystemDocument(ElementDocument):
    containers: list[ContainerDocument] = Field(default_factory=list)

    def to_system(self) -> InternalSystem:
        return InternalSystem(
            id=self.id,
            name=self.name,
            description=self.description,
            containers=tuple(container.to_container() for container in self.containers),
        )


class ModelDocument(_DocumentModel):
    """Top-level model document.

    Keys may be camelCase (``internalSystems``) or snake_case
    (``internal_systems``). Usages are listed under ``uses`` as
    ``{"target": ..., "for": ..., "type": ...}``.
    """

    internal_systems: list[InternalSystemDocument] = Field(default_factory=list)
    external_systems: list[ActorDocument] = Field(default_factory=list)
    internal_users: list[ActorDocument] = Field(default_factory=list)
    external_users: list[ActorDocument] = Field(default_factory=list)

    def to_model(self) -> Model:
        return Model(
            internal_systems=tuple(system.to_system() for system in self.internal_systems),
            external_systems=tuple(
                ExternalSystem(a.id, a.name, a.description, a.usages())
                for a in self.external_systems
            ),
            internal_users=tuple(
                InternalUser(a.id, a.name, a.description, a.usages())
                for a in self.internal_users
            ),
            external_users=tuple(
                ExternalUser(a.id, a.name, a.description, a.usages())
                for a in self.external_users
            ),
        )


def parse_model(data: dict[str, Any]) -> Model:
    """Validate a decoded model document and build the model.

    Args:
        data: Decoded JSON document.

    Returns:
        The architecture model.

    Raises:
        ModelLoadError: If the document does not validate.
    """
    try:
        document = ModelDocument.model_validate(data)
    except ValidationError as e:
        raise ModelLoadError(f"Invalid model document:\n{e}") from e
    return document.to_model()


def load_model(path: str | Path) -> Model:
    """Read a JSON model document from disk.

    Args:
        path: Path to the document.

    Returns:
        The architecture model.

    Raises:
        ModelLoadError: If the file cannot be read, decoded or validated.
    """
    model_path = Path(path)
    logger.info(f"Loading model from {model_path}")

    try:
        data = json.loads(model_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ModelLoadError(f"Cannot read model file {model_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ModelLoadError(f"Model file {model_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ModelLoadError(f"Model file {model_path} must contain a JSON object")

    model = parse_model(data)
    logger.info(
        f"Loaded {len(model.internal_systems)} internal systems, "
        f"{len(model.external_systems)} external systems, "
        f"{len(model.internal_users) + len(model.external_users)} users",
    )
    return model
