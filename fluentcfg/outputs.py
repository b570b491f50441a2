"""Output and parser resources and their rendering into configuration sections."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Iterator, Optional

from fluentcfg.resource import GROUP_VERSION, ObjectMeta, TypeMeta
from fluentcfg.sections import Plugin, _render_section

__all__ = [
    "OutputSpec",
    "ClusterOutput",
    "ClusterOutputList",
    "Decoder",
    "ParserSpec",
    "ClusterParser",
    "ClusterParserList",
]


def _plugins_of(spec: Any) -> Iterator[Plugin]:
    """Yield the plugins set on a dataclass, in field declaration order."""
    for spec_field in fields(spec):
        value = getattr(spec, spec_field.name)
        if isinstance(value, Plugin):
            yield value


@dataclass
class OutputSpec:
    """Desired state of a cluster output; one section per plugin that is set."""

    match: str = ""
    match_regex: str = ""
    alias: str = ""
    retry_limit: str = ""
    elasticsearch: Optional[Plugin] = None
    file: Optional[Plugin] = None
    forward: Optional[Plugin] = None
    http: Optional[Plugin] = None
    kafka: Optional[Plugin] = None
    null: Optional[Plugin] = None
    stdout: Optional[Plugin] = None
    tcp: Optional[Plugin] = None
    loki: Optional[Plugin] = None
    syslog: Optional[Plugin] = None
    datadog: Optional[Plugin] = None
    firehose: Optional[Plugin] = None
    splunk: Optional[Plugin] = None
    opensearch: Optional[Plugin] = None
    opentelemetry: Optional[Plugin] = None
    prometheus_remote_write: Optional[Plugin] = None
    custom_plugin: Optional[Plugin] = None

    def plugins(self) -> Iterator[Plugin]:
        """Yield the configured plugins in declaration order."""
        return _plugins_of(self)


@dataclass
class ClusterOutput:
    """A cluster-level output resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: OutputSpec = field(default_factory=OutputSpec)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(api_version=str(GROUP_VERSION), kind="ClusterOutput")
    )


@dataclass
class ClusterOutputList:
    """A list of cluster outputs."""

    items: list[ClusterOutput] = field(default_factory=list)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(
            api_version=str(GROUP_VERSION), kind="ClusterOutputList"
        )
    )

    def load(self, secret_loader: Any) -> str:
        """Render every output as [Output] sections, ordered by resource name.

        The items are sorted in place by name.
        """
        self.items.sort(key=lambda item: item.metadata.name)
        return "".join(
            _render_section(
                "Output",
                plugin,
                [
                    ("Match", item.spec.match),
                    ("Match_Regex", item.spec.match_regex),
                    ("Alias", item.spec.alias),
                    ("Retry_Limit", item.spec.retry_limit),
                ],
                secret_loader,
            )
            for item in self.items
            for plugin in item.spec.plugins()
        )


@dataclass
class Decoder:
    """A decoder applied to a field after parsing."""

    decode_field: str = ""
    decode_field_as: str = ""


@dataclass
class ParserSpec:
    """Desired state of a cluster parser."""

    json: Optional[Plugin] = None
    regex: Optional[Plugin] = None
    ltsv: Optional[Plugin] = None
    logfmt: Optional[Plugin] = None
    decoders: list[Decoder] = field(default_factory=list)

    def plugins(self) -> Iterator[Plugin]:
        """Yield the configured parser formats in declaration order."""
        return _plugins_of(self)


@dataclass
class ClusterParser:
    """A cluster-level parser resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ParserSpec = field(default_factory=ParserSpec)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(api_version=str(GROUP_VERSION), kind="ClusterParser")
    )


def _render_parser(item: ClusterParser, plugin: Plugin, secret_loader: Any) -> str:
    parts = [
        "[PARSER]\n",
        f"    Name    {item.metadata.name}\n",
        f"    Format    {plugin.name}\n",
        str(plugin.params(secret_loader)),
    ]
    for decoder in item.spec.decoders:
        if decoder.decode_field:
            parts.append(f"    Decode_Field    {decoder.decode_field}\n")
        if decoder.decode_field_as:
            parts.append(f"    Decode_Field_As    {decoder.decode_field_as}\n")
    return "".join(parts)


@dataclass
class ClusterParserList:
    """A list of cluster parsers."""

    items: list[ClusterParser] = field(default_factory=list)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(
            api_version=str(GROUP_VERSION), kind="ClusterParserList"
        )
    )

    def load(self, secret_loader: Any) -> str:
        """Render every parser as [PARSER] sections, ordered by resource name.

        The items are sorted in place by name.
        """
        self.items.sort(key=lambda item: item.metadata.name)
        return "".join(
            _render_parser(item, plugin, secret_loader)
            for item in self.items
            for plugin in item.spec.plugins()
        )