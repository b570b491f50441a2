"""Input and filter resources and their rendering into configuration sections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Iterator, Optional

from fluentcfg.resource import GROUP_VERSION, KeyValues, ObjectMeta, TypeMeta

__all__ = [
    "Plugin",
    "InputSpec",
    "ClusterInput",
    "ClusterInputList",
    "FilterItem",
    "FilterSpec",
    "ClusterFilter",
    "ClusterFilterList",
]


class Plugin(ABC):
    """A configurable plugin that renders its own parameters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The plugin name written on the section's Name line; may be empty."""

    @abstractmethod
    def params(self, secret_loader: Any) -> KeyValues:
        """Return the plugin's parameters, resolving secrets through the loader."""


def _plugins_in_order(spec: Any) -> Iterator[Plugin]:
    """Yield the plugins set on a dataclass, in field declaration order."""
    for spec_field in fields(spec):
        value = getattr(spec, spec_field.name)
        if isinstance(value, Plugin):
            yield value


def _render_section(
    header: str,
    plugin: Plugin,
    lines: Iterable[tuple[str, str]],
    secret_loader: Any,
) -> str:
    parts = [f"[{header}]\n"]
    if plugin.name:
        parts.append(f"    Name    {plugin.name}\n")
    parts.extend(f"    {key}    {value}\n" for key, value in lines if value)
    parts.append(str(plugin.params(secret_loader)))
    return "".join(parts)


@dataclass
class InputSpec:
    """Desired state of a cluster input; at most one section per plugin field."""

    alias: str = ""
    dummy: Optional[Plugin] = None
    tail: Optional[Plugin] = None
    systemd: Optional[Plugin] = None
    node_exporter_metrics: Optional[Plugin] = None
    prometheus_scrape_metrics: Optional[Plugin] = None
    fluent_bit_metrics: Optional[Plugin] = None
    custom_plugin: Optional[Plugin] = None

    def plugins(self) -> Iterator[Plugin]:
        """Yield the configured plugins in declaration order."""
        return _plugins_in_order(self)


@dataclass
class ClusterInput:
    """A cluster-level input resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: InputSpec = field(default_factory=InputSpec)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(api_version=str(GROUP_VERSION), kind="ClusterInput")
    )


@dataclass
class ClusterInputList:
    """A list of cluster inputs."""

    items: list[ClusterInput] = field(default_factory=list)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(
            api_version=str(GROUP_VERSION), kind="ClusterInputList"
        )
    )

    def load(self, secret_loader: Any) -> str:
        """Render every input as [Input] sections, ordered by resource name.

        The items are sorted in place by name.
        """
        self.items.sort(key=lambda item: item.metadata.name)
        return "".join(
            _render_section(
                "Input", plugin, [("Alias", item.spec.alias)], secret_loader
            )
            for item in self.items
            for plugin in item.spec.plugins()
        )


@dataclass
class FilterItem:
    """One step of a filter chain; every plugin set here yields a section."""

    grep: Optional[Plugin] = None
    record_modifier: Optional[Plugin] = None
    kubernetes: Optional[Plugin] = None
    modify: Optional[Plugin] = None
    nest: Optional[Plugin] = None
    parser: Optional[Plugin] = None
    lua: Optional[Plugin] = None
    throttle: Optional[Plugin] = None
    rewrite_tag: Optional[Plugin] = None
    aws: Optional[Plugin] = None
    multiline: Optional[Plugin] = None
    custom_plugin: Optional[Plugin] = None

    def plugins(self) -> Iterator[Plugin]:
        """Yield the configured plugins in declaration order."""
        return _plugins_in_order(self)


@dataclass
class FilterSpec:
    """Desired state of a cluster filter."""

    match: str = ""
    match_regex: str = ""
    filter_items: list[FilterItem] = field(default_factory=list)


@dataclass
class ClusterFilter:
    """A cluster-level filter resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: FilterSpec = field(default_factory=FilterSpec)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(api_version=str(GROUP_VERSION), kind="ClusterFilter")
    )


@dataclass
class ClusterFilterList:
    """A list of cluster filters."""

    items: list[ClusterFilter] = field(default_factory=list)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(
            api_version=str(GROUP_VERSION), kind="ClusterFilterList"
        )
    )

    def load(self, secret_loader: Any) -> str:
        """Render every filter as [Filter] sections, ordered by resource name.

        The items are sorted in place by name.
        """
        self.items.sort(key=lambda item: item.metadata.name)
        return "".join(
            _render_section(
                "Filter",
                plugin,
                [("Match", item.spec.match), ("Match_Regex", item.spec.match_regex)],
                secret_loader,
            )
            for item in self.items
            for filter_item in item.spec.filter_items
            for plugin in filter_item.plugins()
        )