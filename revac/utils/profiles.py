"""
Predefined configuration profiles for REVAC.

Profiles are budget presets merged on top of the schema defaults before user
configuration and overrides are applied.
"""

from __future__ import annotations

from typing import Dict

from omegaconf import OmegaConf


PROFILES: Dict[str, Dict[str, object]] = {
    "fast": {
        "tuning": {
            "vectors": 20,
            "parents": 10,
            "h": 3,
            "runs": 1,
            "evaluations": 500,
        },
    },
    "balanced": {
        "tuning": {
            "vectors": 80,
            "parents": 40,
            "h": 10,
            "runs": 5,
            "evaluations": 5000,
        },
    },
    "exhaustive": {
        "tuning": {
            "vectors": 100,
            "parents": 50,
            "h": 10,
            "runs": 10,
            "evaluations": 10000,
            "workers": 4,
        },
    },
}


def list_profiles() -> Dict[str, Dict[str, object]]:
    """Return a copy of the registered profiles."""

    return {name: OmegaConf.to_container(OmegaConf.create(conf), resolve=True) for name, conf in PROFILES.items()}


def get_profile(name: str) -> Dict[str, object]:
    """Return a profile configuration by name."""

    if name not in PROFILES:
        raise KeyError(f"Unknown profile '{name}'. Available profiles: {list(PROFILES)}")
    return OmegaConf.to_container(OmegaConf.create(PROFILES[name]), resolve=True)
