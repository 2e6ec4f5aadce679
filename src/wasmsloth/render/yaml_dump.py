"""YAML dumping for generated rule documents."""

from __future__ import annotations

from typing import Any

import yaml


class RulesDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


RulesDumper.add_representer(str, _represent_str)


def dump_rules_document(data: dict[str, Any]) -> str:
    """Dump a rules document keeping key order."""
    return yaml.dump(
        data,
        Dumper=RulesDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=1000,
    )


def generated_header(version: str) -> str:
    """Comment block placed at the top of every rendered document."""
    return (
        "---\n"
        f"# Code generated by wasm-sloth ({version}): https://github.com/slok/sloth.\n"
        "# DO NOT EDIT.\n\n"
    )
