# fluentcfg

`fluentcfg` builds Fluent Bit configuration text from resource objects.
You describe inputs, filters, outputs and parsers as Python dataclasses,
attach plugin objects to them, and the package renders the `[Service]`,
`[Input]`, `[Filter]`, `[Output]` and `[PARSER]` sections that Fluent Bit
reads.

Resources in a list are rendered in order of their `metadata.name`; the
`load` methods sort the list's `items` in place. Within one resource,
plugins are rendered in the order their fields are declared on the spec.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `fluentcfg.resource`
  - `GroupVersion` (with `GROUP_VERSION`, `fluentbit.fluent.io/v1alpha2`),
    `TypeMeta` and `ObjectMeta`.
  - `KeyValues`: an ordered list of key/value pairs in which keys may
    repeat. `insert`, `extend` and `merge` append; `str()` renders each
    pair as `    key    value` on its own line.
  - `FluentBitSpec` and `FluentBit`. `FluentBit` has `has_finalizer`,
    `add_finalizer`, `remove_finalizer` (removes every occurrence) and
    `is_being_deleted` (true when `metadata.deletion_timestamp` is set).
    `FLUENTBIT_FINALIZER_NAME` holds the finalizer name.
- `fluentcfg.sections`
  - `Plugin`: the abstract base for plugins. A subclass provides a `name`
    property and `params(secret_loader)` returning `KeyValues`.
  - `InputSpec`, `ClusterInput`, `ClusterInputList`: `load(secret_loader)`
    renders `[Input]` sections with `Name` and `Alias` lines.
  - `FilterItem`, `FilterSpec`, `ClusterFilter`, `ClusterFilterList`:
    `load(secret_loader)` renders one `[Filter]` section for every plugin
    of every filter item, with `Match` and `Match_Regex` lines.
- `fluentcfg.outputs`
  - `OutputSpec`, `ClusterOutput`, `ClusterOutputList`: `load(secret_loader)`
    renders `[Output]` sections with `Match`, `Match_Regex`, `Alias` and
    `Retry_Limit` lines.
  - `Decoder`, `ParserSpec`, `ClusterParser`, `ClusterParserList`:
    `load(secret_loader)` renders `[PARSER]` sections whose `Name` is the
    resource name and whose `Format` is the plugin name, followed by the
    plugin parameters and any `Decode_Field` / `Decode_Field_As` lines.
- `fluentcfg.config`
  - `Service`: `params()` returns the `[Service]` parameters (`Daemon`,
    `Flush`, `Grace`, `Http_Listen`, `Http_Port`, `Http_Server`,
    `Log_File`, `Log_Level`, `Parsers_File`) for the fields that are set.
  - `FluentBitConfigSpec`, `Script` and `ClusterFluentBitConfig` with
    `render_main_config`, `render_parser_config` and `render_lua_script`.

Lines whose value is empty (an empty alias, match or retry limit) are
left out. Empty plugin names leave out the `Name` line.

## Example

```python
from fluentcfg.config import ClusterFluentBitConfig, FluentBitConfigSpec, Service
from fluentcfg.outputs import ClusterOutputList
from fluentcfg.resource import KeyValues, ObjectMeta
from fluentcfg.sections import (
    ClusterFilterList,
    ClusterInput,
    ClusterInputList,
    InputSpec,
    Plugin,
)


class Dummy(Plugin):
    @property
    def name(self):
        return "dummy"

    def params(self, secret_loader):
        return KeyValues([("Tag", "logs.foo.bar")])


inputs = ClusterInputList(
    items=[
        ClusterInput(
            metadata=ObjectMeta(name="input0"),
            spec=InputSpec(alias="input0_alias", dummy=Dummy()),
        )
    ]
)

config = ClusterFluentBitConfig(
    spec=FluentBitConfigSpec(service=Service(daemon=False, flush_seconds=1)),
)
print(config.render_main_config(None, inputs, ClusterFilterList(), ClusterOutputList()))
```

When input sections are rendered and no output section is, the main
configuration ends with a `null` output matching `*` (`NULL_OUTPUT_SECTION`).

`render_parser_config(secret_loader, parsers)` returns the parser sections.
`render_lua_script(config_map_loader, filters, namespace)` collects, for
every filter item with a `lua` plugin, a `Script` named after
`lua.script.key` whose content comes from
`config_map_loader.load_config_map(lua.script, namespace)`; the scripts
are returned sorted by name.

The secret loader is passed unchanged to each plugin's `params`. Any
error a plugin or loader raises propagates out of the render call.

## What the package does not do

- It ships no concrete plugins. Tail, dummy, modify, kubernetes, http,
  syslog and every other plugin must be supplied as `Plugin` subclasses.
- It provides no secret loader or config map loader; callers pass their
  own objects.
- It does not talk to a Kubernetes cluster, watch resources, or write
  configuration files or secrets; it only returns configuration text.
- It has no command-line interface.