"""Top-level Fluent Bit configuration and rendering of the complete config files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fluentcfg.outputs import ClusterOutputList, ClusterParserList
from fluentcfg.resource import GROUP_VERSION, KeyValues, ObjectMeta, TypeMeta
from fluentcfg.sections import ClusterFilterList, ClusterInputList

__all__ = [
    "Service",
    "FluentBitConfigSpec",
    "Script",
    "ClusterFluentBitConfig",
    "NULL_OUTPUT_SECTION",
]

# Written when inputs exist but no output is configured, so records are discarded.
NULL_OUTPUT_SECTION = "[Output]\n    Name    null\n    Match   *"


def _render_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class Service:
    """Global behaviour of the Fluent Bit engine."""

    daemon: Optional[bool] = None
    flush_seconds: Optional[int] = None
    grace_seconds: Optional[int] = None
    http_listen: str = ""
    http_port: Optional[int] = None
    http_server: Optional[bool] = None
    log_file: str = ""
    log_level: str = ""
    parsers_file: str = ""

    def params(self) -> KeyValues:
        """Return the [Service] section parameters in their fixed order."""
        kvs = KeyValues()
        if self.daemon is not None:
            kvs.insert("Daemon", _render_bool(self.daemon))
        if self.flush_seconds is not None:
            kvs.insert("Flush", str(self.flush_seconds))
        if self.grace_seconds is not None:
            kvs.insert("Grace", str(self.grace_seconds))
        if self.http_listen:
            kvs.insert("Http_Listen", self.http_listen)
        if self.http_port is not None:
            kvs.insert("Http_Port", str(self.http_port))
        if self.http_server is not None:
            kvs.insert("Http_Server", _render_bool(self.http_server))
        if self.log_file:
            kvs.insert("Log_File", self.log_file)
        if self.log_level:
            kvs.insert("Log_Level", self.log_level)
        if self.parsers_file:
            kvs.insert("Parsers_File", self.parsers_file)
        return kvs


@dataclass
class FluentBitConfigSpec:
    """Desired state of a cluster-level Fluent Bit configuration.

    Label selectors are kept as plain mappings.
    """

    service: Optional[Service] = None
    input_selector: dict[str, Any] = field(default_factory=dict)
    filter_selector: dict[str, Any] = field(default_factory=dict)
    output_selector: dict[str, Any] = field(default_factory=dict)
    parser_selector: dict[str, Any] = field(default_factory=dict)
    namespace: Optional[str] = None


@dataclass(frozen=True)
class Script:
    """A Lua script file: its file name and its content."""

    name: str
    content: str


@dataclass
class ClusterFluentBitConfig:
    """A cluster-level Fluent Bit configuration resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: FluentBitConfigSpec = field(default_factory=FluentBitConfigSpec)
    type_meta: TypeMeta = field(
        default_factory=lambda: TypeMeta(
            api_version=str(GROUP_VERSION), kind="ClusterFluentBitConfig"
        )
    )

    def render_main_config(
        self,
        secret_loader: Any,
        inputs: ClusterInputList,
        filters: ClusterFilterList,
        outputs: ClusterOutputList,
    ) -> str:
        """Render the main configuration file: service, inputs, filters, outputs."""
        parts: list[str] = []
        if self.spec.service is not None:
            parts.append("[Service]\n")
            parts.append(str(self.spec.service.params()))

        input_sections = inputs.load(secret_loader)
        filter_sections = filters.load(secret_loader)
        output_sections = outputs.load(secret_loader)
        if input_sections and not output_sections:
            output_sections = NULL_OUTPUT_SECTION

        parts.extend((input_sections, filter_sections, output_sections))
        return "".join(parts)

    def render_parser_config(
        self, secret_loader: Any, parsers: ClusterParserList
    ) -> str:
        """Render the parsers configuration file."""
        return parsers.load(secret_loader)

    def render_lua_script(
        self, config_map_loader: Any, filters: ClusterFilterList, namespace: str
    ) -> list[Script]:
        """Load every Lua script referenced by the filters, sorted by file name.

        The loader's ``load_config_map(selector, namespace)`` supplies the
        content; the selector's ``key`` names the script.
        """
        scripts = [
            Script(
                name=item.lua.script.key,
                content=config_map_loader.load_config_map(item.lua.script, namespace),
            )
            for cluster_filter in filters.items
            for item in cluster_filter.spec.filter_items
            if item.lua is not None
        ]
        scripts.sort(key=lambda script: script.name)
        return scripts