"""Deployment value types referenced from event payloads.

These are owned by the release machinery; deploylog only needs to carry them
through decode/encode and read the few members the renderer displays.

Older records were written with capitalised member names (``ServiceSpecs``,
``PerContainer``); both spellings are accepted and camelCase is emitted.
Nil maps and slices were written as ``null``; those read as empty.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, RootModel, model_validator

# Service spec meaning "every service in the cluster"
SERVICE_SPEC_ALL = "<all>"


def wire_field(name: str, legacy: str, **kwargs: Any) -> Any:
    """Field read from either spelling and written in camelCase."""
    return Field(
        validation_alias=AliasChoices(name, legacy),
        serialization_alias=name,
        **kwargs,
    )


class WireModel(BaseModel):
    """Base for value types decoded from stored event metadata."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def null_as_default(cls, data: Any) -> Any:
        """Treat null members as absent so they take their defaults."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Cause(WireModel):
    """Who asked for a change, and why."""

    message: str = wire_field("message", "Message", default="")
    user: str = wire_field("user", "User", default="")


class Spec(WireModel):
    """An update request as written to the commit that applied it."""

    type: str = wire_field("type", "Type", default="")
    cause: Cause = wire_field("cause", "Cause", default_factory=Cause)
    spec: Any = wire_field("spec", "Spec", default=None)


class ReleaseSpec(WireModel):
    """A user-requested release."""

    service_specs: list[str] = wire_field("serviceSpecs", "ServiceSpecs", default_factory=list)
    image_spec: str = wire_field("imageSpec", "ImageSpec", default="")
    kind: str = wire_field("kind", "Kind", default="")
    excludes: list[str] = wire_field("excludes", "Excludes", default_factory=list)

    def is_all_services(self) -> bool:
        """Check if the release targeted every service."""
        return SERVICE_SPEC_ALL in self.service_specs


class Change(WireModel):
    """One new image picked up for one service."""

    service_id: str = wire_field("serviceID", "ServiceID", default="")
    image_id: str = wire_field("imageID", "ImageID", default="")


class Automated(WireModel):
    """Release spec generated for automated services."""

    changes: list[Change] = wire_field("changes", "Changes", default_factory=list)


class ContainerUpdate(WireModel):
    """Image change applied to a single container."""

    container: str = wire_field("container", "Container", default="")
    current: str = wire_field("current", "Current", default="")
    target: str = wire_field("target", "Target", default="")


class ServiceResult(WireModel):
    """What happened to one service during an update."""

    status: str = wire_field("status", "Status", default="")
    error: Optional[str] = wire_field("error", "Error", default=None)
    per_container: list[ContainerUpdate] = wire_field(
        "perContainer", "PerContainer", default_factory=list
    )


class Result(RootModel[dict[str, ServiceResult]]):
    """Outcome of an update, keyed by service ID."""

    root: dict[str, ServiceResult] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def null_as_empty(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: {} if v is None else v for k, v in data.items()}
        return data

    def image_ids(self) -> list[str]:
        """Return target images across all services, sorted and de-duplicated."""
        images = {
            update.target
            for service in self.root.values()
            for update in service.per_container
            if update.target
        }
        return sorted(images)
