"""
Parameter descriptors for REVAC tuning runs.

A `ParameterSpace` fixes the dimensionality of every parameter vector: component
``i`` of a vector always belongs to ``parameters[i]``.  Vectors are one
dimensional float arrays of exactly that length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

import numpy as np

from revac.exceptions import RevacConfigError

from .random_source import RandomSource

RangeLike = Union[Sequence[float], Tuple[float, float]]
ParameterSpec = Union["Parameter", Tuple[str, RangeLike]]


@dataclass(frozen=True)
class Parameter:
    """Name and inclusive range of legal values for a tunable parameter."""

    name: str
    low: float
    high: float

    @classmethod
    def from_pair(cls, name: str, bounds: RangeLike) -> "Parameter":
        values = list(bounds)
        if len(values) != 2:
            raise RevacConfigError(
                f"Parameter '{name}' needs a [min, max] range, got {values!r}.",
                context={"parameter": name},
            )
        try:
            low, high = float(values[0]), float(values[1])
        except (TypeError, ValueError) as exc:
            raise RevacConfigError(
                f"Parameter '{name}' has non-numeric bounds {values!r}.",
                context={"parameter": name},
            ) from exc
        return cls(name=str(name), low=low, high=high)

    @property
    def range(self) -> Tuple[float, float]:
        return (self.low, self.high)

    @property
    def width(self) -> float:
        return self.high - self.low

    def validate(self) -> None:
        if not self.name:
            raise RevacConfigError("Parameter names cannot be empty.")
        if not (math.isfinite(self.low) and math.isfinite(self.high)):
            raise RevacConfigError(
                f"Parameter '{self.name}' must have finite bounds, got [{self.low}, {self.high}].",
                context={"parameter": self.name},
            )
        if self.low > self.high:
            raise RevacConfigError(
                f"Parameter '{self.name}' has min > max: [{self.low}, {self.high}].",
                context={"parameter": self.name},
            )

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


class ParameterSpace:
    """Ordered, immutable collection of parameters defining the vector layout."""

    def __init__(self, parameters: Iterable[ParameterSpec]) -> None:
        items: List[Parameter] = []
        for spec in parameters:
            if isinstance(spec, Parameter):
                items.append(spec)
            else:
                name, bounds = spec
                items.append(Parameter.from_pair(name, bounds))
        if not items:
            raise RevacConfigError("At least one parameter is required.")
        seen = set()
        for parameter in items:
            parameter.validate()
            if parameter.name in seen:
                raise RevacConfigError(
                    f"Duplicate parameter name '{parameter.name}'.",
                    context={"parameter": parameter.name},
                )
            seen.add(parameter.name)
        self._parameters: Tuple[Parameter, ...] = tuple(items)

    @classmethod
    def from_mapping(cls, ranges: Mapping[str, RangeLike]) -> "ParameterSpace":
        """Build a space from an ordered ``{name: [min, max]}`` mapping."""
        return cls(list(ranges.items()))

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._parameters)

    def __getitem__(self, index: int) -> Parameter:
        return self._parameters[index]

    @property
    def names(self) -> List[str]:
        return [parameter.name for parameter in self._parameters]

    def sample(self, random: RandomSource) -> np.ndarray:
        """Draw a vector with every component uniform within its parameter's range."""
        return np.array([random.uniform(p.low, p.high) for p in self._parameters], dtype=float)

    def contains(self, vector: Sequence[float]) -> bool:
        """Return ``True`` when every component lies inside its declared range."""
        if len(vector) != len(self._parameters):
            return False
        return all(p.contains(float(v)) for p, v in zip(self._parameters, vector))

    def to_mapping(self, vector: Sequence[float]) -> Dict[str, float]:
        """Pair each component of ``vector`` with its parameter name."""
        if len(vector) != len(self._parameters):
            raise RevacConfigError(
                f"Vector has {len(vector)} components but the space has {len(self._parameters)} parameters."
            )
        return {p.name: float(v) for p, v in zip(self._parameters, vector)}

    def describe(self) -> Dict[str, List[float]]:
        return {p.name: [p.low, p.high] for p in self._parameters}

    def __repr__(self) -> str:
        return f"ParameterSpace({self.describe()!r})"
