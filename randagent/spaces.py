import math
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Tuple, Union

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Discrete:
    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if isinstance(self.minimum, bool) or isinstance(self.maximum, bool):
            raise TypeError("Discrete bounds must be integers, not booleans.")
        object.__setattr__(self, "minimum", int(self.minimum))
        object.__setattr__(self, "maximum", int(self.maximum))
        if self.minimum > self.maximum:
            raise ValueError(f"Discrete minimum {self.minimum} is greater than maximum {self.maximum}.")
        if self.minimum < INT64_MIN or self.maximum > INT64_MAX:
            raise ValueError(f"Discrete bounds [{self.minimum}, {self.maximum}] do not fit in a signed 64-bit integer.")


@dataclass(frozen=True)
class Continuous:
    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "minimum", float(self.minimum))
        object.__setattr__(self, "maximum", float(self.maximum))
        if not (math.isfinite(self.minimum) and math.isfinite(self.maximum)):
            raise ValueError("Continuous bounds must be finite.")
        if self.minimum > self.maximum:
            raise ValueError(f"Continuous minimum {self.minimum} is greater than maximum {self.maximum}.")


DimensionBoundaries = Union[Discrete, Continuous]


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Float:
    value: float


DimensionValue = Union[Integer, Float]
AgentAction = Tuple[DimensionValue, ...]
EnvironmentState = Tuple[DimensionValue, ...]

DrawInteger = Callable[[int, int], int]
DrawFloat = Callable[[float, float], float]


class ActionSpace:
    """Ordered, read-only sequence of dimension boundaries.

    The order of the boundaries is the order of the values in every action
    sampled from this space.
    """

    def __init__(self, boundaries: Iterable[DimensionBoundaries]):
        self._boundaries: Tuple[DimensionBoundaries, ...] = tuple(boundaries)
        for boundary in self._boundaries:
            if not isinstance(boundary, (Discrete, Continuous)):
                raise TypeError(f"Unsupported dimension boundary: {boundary!r}")

    def __len__(self) -> int:
        return len(self._boundaries)

    def __iter__(self) -> Iterator[DimensionBoundaries]:
        return iter(self._boundaries)

    def __getitem__(self, index: int) -> DimensionBoundaries:
        return self._boundaries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ActionSpace):
            return NotImplemented
        return self._boundaries == other._boundaries

    def __hash__(self) -> int:
        return hash(self._boundaries)

    def __repr__(self) -> str:
        return f"ActionSpace({list(self._boundaries)!r})"

    def sample(self, draw_integer: DrawInteger, draw_float: DrawFloat) -> AgentAction:
        values = []
        for boundary in self._boundaries:
            if isinstance(boundary, Discrete):
                values.append(Integer(draw_integer(boundary.minimum, boundary.maximum)))
            else:
                values.append(Float(draw_float(boundary.minimum, boundary.maximum)))
        return tuple(values)

    def contains(self, action: AgentAction) -> bool:
        if len(action) != len(self._boundaries):
            return False
        for value, boundary in zip(action, self._boundaries):
            if isinstance(boundary, Discrete):
                if not isinstance(value, Integer):
                    return False
            elif not isinstance(value, Float):
                return False
            if not boundary.minimum <= value.value <= boundary.maximum:
                return False
        return True
