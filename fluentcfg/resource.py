"""Core resource types shared by every Fluent Bit configuration object."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Iterator, Optional

__all__ = [
    "GroupVersion",
    "GROUP_VERSION",
    "FLUENTBIT_FINALIZER_NAME",
    "TypeMeta",
    "ObjectMeta",
    "KeyValues",
    "FluentBitSpec",
    "FluentBit",
]


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with its version."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group="fluentbit.fluent.io", version="v1alpha2")

FLUENTBIT_FINALIZER_NAME = "fluentbit.fluent.io"


@dataclass
class TypeMeta:
    """The API version and kind of a resource."""

    api_version: str = ""
    kind: str = ""


@dataclass
class ObjectMeta:
    """Identity and bookkeeping data attached to every resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    deletion_timestamp: Optional[datetime] = None


class KeyValues:
    """An ordered list of configuration key/value pairs.

    Keys may repeat; the order of insertion is the order of rendering.
    """

    INDENT = "    "
    SEPARATOR = "    "

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: list[tuple[str, str]] = []
        self.extend(pairs)

    def insert(self, key: str, value: str) -> None:
        """Append one key/value pair."""
        self._pairs.append((str(key), str(value)))

    def extend(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Append several key/value pairs in order."""
        for key, value in pairs:
            self.insert(key, value)

    def merge(self, other: "KeyValues") -> None:
        """Append every pair of another collection after the existing ones."""
        self.extend(other)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyValues):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"KeyValues({self._pairs!r})"

    def __str__(self) -> str:
        return "".join(
            f"{self.INDENT}{key}{self.SEPARATOR}{value}\n" for key, value in self._pairs
        )


@dataclass
class FluentBitSpec:
    """Desired state of a Fluent Bit daemon set.

    Kubernetes core structures (volumes, resources, affinity and the like)
    are kept as plain mappings.
    """

    image: str = ""
    args: list[str] = field(default_factory=list)
    image_pull_policy: str = ""
    image_pull_secrets: list[dict[str, Any]] = field(default_factory=list)
    position_db: dict[str, Any] = field(default_factory=dict)
    container_log_real_path: str = ""
    resources: dict[str, Any] = field(default_factory=dict)
    node_selector: dict[str, str] = field(default_factory=dict)
    affinity: Optional[dict[str, Any]] = None
    tolerations: list[dict[str, Any]] = field(default_factory=list)
    fluent_bit_config_name: str = ""
    secrets: list[str] = field(default_factory=list)
    runtime_class_name: str = ""
    priority_class_name: str = ""
    volumes: list[dict[str, Any]] = field(default_factory=list)
    volumes_mounts: list[dict[str, Any]] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    security_context: Optional[dict[str, Any]] = None
    host_network: bool = False


@dataclass
class FluentBit:
    """A Fluent Bit deployment resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: FluentBitSpec = field(default_factory=FluentBitSpec)
    status: dict[str, Any] = field(default_factory=dict)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(api_version=str(GROUP_VERSION), kind="FluentBit")
    )

    def is_being_deleted(self) -> bool:
        """True when a deletion timestamp is set."""
        return self.metadata.deletion_timestamp is not None

    def has_finalizer(self, finalizer_name: str) -> bool:
        """True when the named finalizer is present."""
        return finalizer_name in self.metadata.finalizers

    def add_finalizer(self, finalizer_name: str) -> None:
        """Append the named finalizer."""
        self.metadata.finalizers.append(finalizer_name)

    def remove_finalizer(self, finalizer_name: str) -> None:
        """Remove every occurrence of the named finalizer."""
        self.metadata.finalizers = [
            name for name in self.metadata.finalizers if name != finalizer_name
        ]