"""
Unified configuration loader for REVAC.

Configurations can be provided as dictionaries, JSON/YAML files, or YAML
strings and are merged on top of the schema defaults (and an optional profile).
Keys outside the schema are rejected so typos surface before a run starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from revac.exceptions import RevacConfigError

from .config_reference import CONFIG_SCHEMA, defaults
from .profiles import get_profile


ConfigLike = Union[str, Path, Mapping[str, Any], DictConfig]

# Sections accepted in user configuration without a schema entry.
FREEFORM_SECTIONS = {"parameters"}


@dataclass
class LoadedConfig:
    """Container that exposes both OmegaConf and plain-dict views."""

    data: DictConfig

    def to_dict(self) -> Dict[str, Any]:
        return OmegaConf.to_container(self.data, resolve=True)  # type: ignore[return-value]

    def section(self, name: str) -> Dict[str, Any]:
        if name not in self.data:
            return {}
        return OmegaConf.to_container(self.data[name], resolve=True)  # type: ignore[return-value]

    def __getitem__(self, item: str) -> Any:
        return self.data[item]


def validate_keys(config: Mapping[str, Any]) -> None:
    """Raise `RevacConfigError` for sections or keys unknown to the schema."""

    for section, values in config.items():
        if section in FREEFORM_SECTIONS:
            continue
        if section not in CONFIG_SCHEMA:
            raise RevacConfigError(
                f"Unknown configuration section '{section}'. Options: {sorted(CONFIG_SCHEMA)}",
                context={"key": section},
            )
        if not isinstance(values, Mapping):
            raise RevacConfigError(f"Configuration section '{section}' must be a mapping.", context={"key": section})
        for key in values:
            if key not in CONFIG_SCHEMA[section]:
                raise RevacConfigError(
                    f"Unknown configuration key '{section}.{key}'.",
                    context={"key": f"{section}.{key}"},
                )


class ConfigLoader:
    """
    Load and merge REVAC configuration sources.

    Parameters
    ----------
    global_config : Optional[ConfigLike]
        Optional path or mapping replacing the schema defaults as the base layer.
    """

    def __init__(self, global_config: Optional[ConfigLike] = None) -> None:
        base = OmegaConf.create(defaults())
        if global_config is not None:
            base = OmegaConf.merge(base, self._coerce(global_config))
        self._global_conf = base

    def _coerce(self, source: ConfigLike) -> DictConfig:
        """Convert arbitrary config-like inputs into an OmegaConf instance."""
        if isinstance(source, DictConfig):
            return source
        if isinstance(source, Mapping):
            return OmegaConf.create(dict(source))
        if isinstance(source, Path):
            return self._load_path(source)
        if isinstance(source, str):
            potential_path = Path(source)
            if potential_path.suffix.lower() in {".yaml", ".yml", ".json"} or potential_path.exists():
                return self._load_path(potential_path)
            try:
                parsed = yaml.safe_load(source)
            except yaml.YAMLError as exc:
                raise RevacConfigError(f"Failed to parse configuration string: {exc}") from exc
            if not isinstance(parsed, MutableMapping):
                raise RevacConfigError("Configuration string must evaluate to a mapping.")
            return OmegaConf.create(dict(parsed))
        raise TypeError(f"Unsupported configuration source: {type(source)!r}")

    def _load_path(self, path: Path) -> DictConfig:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            loaded = OmegaConf.load(path)
        elif suffix == ".json":
            loaded = OmegaConf.create(yaml.safe_load(path.read_text(encoding="utf-8")))
        else:
            raise RevacConfigError(f"Unsupported configuration file format: '{suffix}'. Expected YAML or JSON.")
        if not isinstance(loaded, DictConfig):
            raise RevacConfigError(f"Configuration file must contain a mapping: {path}")
        return loaded

    def load(
        self,
        config: Optional[ConfigLike] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        profile: Optional[str] = None,
    ) -> LoadedConfig:
        """Merge defaults, an optional profile, a config source, and overrides."""

        merged = self._global_conf.copy()

        if profile:
            try:
                merged = OmegaConf.merge(merged, get_profile(profile))
            except KeyError as exc:
                raise RevacConfigError(str(exc.args[0]), context={"profile": profile}) from exc

        if config is not None:
            layer = self._coerce(config)
            validate_keys(OmegaConf.to_container(layer, resolve=True))  # type: ignore[arg-type]
            merged = OmegaConf.merge(merged, layer)

        if overrides:
            validate_keys(overrides)
            try:
                merged = OmegaConf.merge(merged, dict(overrides))
            except OmegaConfBaseException as exc:
                raise RevacConfigError(f"Invalid configuration override: {exc}") from exc

        return LoadedConfig(merged)
