# src/netlist_core/components/continuity.py
"""
The continuity variants a component can report through `IContinuityProvider`.

`Continuity` is a closed union of three frozen dataclasses. The extraction
engine dispatches over exactly these three cases, so adding a fourth is a
deliberate change to the engine, not something a component can do on its own.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence, Tuple, Union

from .base_enums import ContinuityKind

logger = logging.getLogger(__name__)

#: Signature of a switch predicate: (index1, index2, position) -> connected.
SwitchPredicate = Callable[[int, int, int], bool]

IndexPair = Tuple[int, int]


def normalize_pairs(pairs: Iterable[Sequence[int]]) -> Tuple[IndexPair, ...]:
    """Returns pairs as sorted (low, high) int tuples with duplicates removed, in first-seen order."""
    seen = {}
    for pair in pairs:
        first, second = (int(i) for i in pair)
        key = (first, second) if first <= second else (second, first)
        seen.setdefault(key, None)
    return tuple(seen)


@dataclass(frozen=True)
class AlwaysConnected:
    """Index pairs that are connected regardless of any state."""
    pairs: Tuple[IndexPair, ...]

    def __post_init__(self):
        object.__setattr__(self, 'pairs', normalize_pairs(self.pairs))

    @property
    def kind(self) -> ContinuityKind:
        return ContinuityKind.ALWAYS_CONNECTED


@dataclass(frozen=True)
class PositionDependent:
    """
    Switch continuity. `predicate(index1, index2, position)` must be a pure
    function; it is called with `index1 < index2` for every point pair of the
    component. `position_names[k]` labels position `k` in switch setups.
    """
    position_count: int
    predicate: SwitchPredicate = field(compare=False)
    position_names: Tuple[str, ...] = ()

    def __post_init__(self):
        names = tuple(str(n) for n in self.position_names)
        if not names and isinstance(self.position_count, int) and self.position_count > 0:
            names = tuple(str(k + 1) for k in range(self.position_count))
        object.__setattr__(self, 'position_names', names)

    @property
    def kind(self) -> ContinuityKind:
        return ContinuityKind.POSITION_DEPENDENT

    def position_name(self, position: int) -> str:
        return self.position_names[position]


@dataclass(frozen=True)
class NoContinuity:
    """No internal continuity is asserted beyond coincidence."""

    @property
    def kind(self) -> ContinuityKind:
        return ContinuityKind.NONE


Continuity = Union[AlwaysConnected, PositionDependent, NoContinuity]

NO_CONTINUITY = NoContinuity()
