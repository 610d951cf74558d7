from typing import List, Optional
from .combat import resolve_combat
from .model import Event, Side, State, Unit, UnitClass
from .movement import resolve_movement
from .rng import DRNG
from .units import create_unit, row_to_y

class Engine:
    """Authoritative simulation engine; owns the battle state."""

    def __init__(self, seed: Optional[int] = None, initial_state: Optional[State] = None):
        self.state = initial_state if initial_state is not None else State()
        self._rng = DRNG(seed)

    def new_match(self) -> str:
        """Issue a fresh match id. Bookkeeping only, never checked again."""
        self.state.battle_id = self._rng.match_id()
        return self.state.battle_id

    def spawn(self, side: Side, unit_class: UnitClass, row: int) -> Unit:
        """Add one unit on the side's edge column at the given row digit."""
        u = create_unit(unit_class, side, row_to_y(row), self._rng)
        self.state.units.append(u)
        return u

    def step(self) -> List[Event]:
        """Advance the simulation one tick: movement, then combat."""
        evts: List[Event] = []
        units = self.state.units
        if len(units) > 1:
            evts += resolve_movement(units, self._rng)
            evts += resolve_combat(units, self._rng, self.state.tick)
        self.state.tick += 1
        return evts

    def survivors(self) -> List[Unit]:
        return [u for u in self.state.units if u.alive]

    def snapshot(self) -> State:
        """Return current state."""
        return self.state
