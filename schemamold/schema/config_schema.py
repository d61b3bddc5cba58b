"""
Schema of the SchemaMold configuration file.

The configuration file is validated with the same machinery as user
documents: each INI section is an object property of ``CONFIG_SCHEMA``.
"""

from .core import EnumField, EnumOption, NumberField, ObjectField


def _create_output_section() -> ObjectField:
    """Create the output section: how results are printed."""
    return ObjectField(
        label="Output settings",
        order=["format", "color", "indent"],
        properties={
            "format": EnumField(
                label="Output format",
                note="text prints a table; json and yaml print the raw error map",
                required=True,
                options=[
                    EnumOption("text", "Human readable"),
                    EnumOption("json", "JSON"),
                    EnumOption("yaml", "YAML"),
                ],
            ),
            "color": EnumField(
                label="Colored output",
                note="auto colors only when writing to a terminal, never disables color",
                options=[EnumOption("auto"), EnumOption("never")],
            ),
            "indent": NumberField(
                label="Indentation",
                note="Spaces per level when writing JSON documents",
                min=0,
                max=8,
                step=1,
            ),
        },
    )


def _create_system_section() -> ObjectField:
    """Create the system section."""
    return ObjectField(
        label="System settings",
        properties={
            "log_level": EnumField(
                label="Log level",
                note="--verbose and --debug on the command line take precedence",
                options=[EnumOption("warning"), EnumOption("info"), EnumOption("debug")],
            ),
        },
    )


CONFIG_SCHEMA = ObjectField(
    label="SchemaMold configuration",
    order=["output", "system"],
    properties={
        "output": _create_output_section(),
        "system": _create_system_section(),
    },
)

CONFIG_DEFAULTS: dict[str, dict[str, str | int]] = {
    "output": {"format": "text", "color": "auto", "indent": 2},
    "system": {"log_level": "warning"},
}
