"""
Schema of the REVAC configuration and the references rendered from it.

Every option lives in ``revac/configs/config_default.yaml`` with its type,
default and description.  The loader takes its defaults from here and the CLI
renders the same data as a console listing or a markdown table.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "configs" / "config_default.yaml"


@dataclass(frozen=True)
class ConfigField:
    """One documented option of a configuration section."""

    section: str
    key: str
    type: str
    default: object
    description: str

    @property
    def dotted(self) -> str:
        return f"{self.section}.{self.key}"

    def describe(self) -> str:
        default = "None" if self.default is None else repr(self.default)
        return f"{self.dotted} ({self.type}, default={default}): {self.description}"


def _read_schema(path: Path = SCHEMA_PATH) -> Dict[str, Dict[str, ConfigField]]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return {
        section: {
            key: ConfigField(
                section=section,
                key=key,
                type=str(meta.get("type", "Any")),
                default=meta.get("default"),
                description=" ".join(str(meta.get("description", "")).split()),
            )
            for key, meta in entries.items()
        }
        for section, entries in raw.items()
    }


CONFIG_SCHEMA: Dict[str, Dict[str, ConfigField]] = _read_schema()


def _select(section: Optional[str]) -> Dict[str, Dict[str, ConfigField]]:
    if section is None:
        return CONFIG_SCHEMA
    if section not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config section '{section}'. Options: {list(CONFIG_SCHEMA)}")
    return {section: CONFIG_SCHEMA[section]}


def defaults() -> Dict[str, Dict[str, Any]]:
    """Default value of every option, grouped by section."""

    return {section: {key: f.default for key, f in fields.items()} for section, fields in CONFIG_SCHEMA.items()}


def find_field(key: str) -> ConfigField:
    """Look up an option by ``key`` or ``section.key``."""

    section, _, name = key.rpartition(".")
    if section:
        candidates = [CONFIG_SCHEMA[section]] if section in CONFIG_SCHEMA else []
    else:
        candidates = list(CONFIG_SCHEMA.values())
    for fields in candidates:
        if name in fields:
            return fields[name]
    raise KeyError(f"Unknown configuration key '{key}'.")


def explain(key: str) -> str:
    return find_field(key).describe()


def to_console(section: Optional[str] = None) -> str:
    """Plain listing, one option per line under a ``[SECTION]`` heading."""

    blocks = []
    for name, fields in _select(section).items():
        blocks.append("\n".join([f"[{name.upper()}]", *(f"  - {f.describe()}" for f in fields.values())]))
    return "\n\n".join(blocks)


def to_markdown(section: Optional[str] = None) -> str:
    """Markdown document with one table per section."""

    suffix = f" - {section.title()}" if section else ""
    lines: List[str] = [f"# REVAC Configuration Reference{suffix}", ""]
    for name, fields in _select(section).items():
        lines += [f"## {name.title()}", "", "| Key | Type | Default | Description |", "| --- | --- | --- | --- |"]
        for f in fields.values():
            description = f.description.replace("|", "\\|")
            lines.append(f"| `{f.key}` | `{f.type}` | `{f.default}` | {description} |")
        lines.append("")
    return "\n".join(lines)


def write_markdown(path: Path, section: Optional[str] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_markdown(section), encoding="utf-8")
    return path


__all__ = [
    "ConfigField",
    "CONFIG_SCHEMA",
    "defaults",
    "find_field",
    "explain",
    "to_console",
    "to_markdown",
    "write_markdown",
]
