"""ECS convenience queries.

Provides a cached reverse index from position to entity IDs. Position stores
are persistent maps, so the index built for one store stays valid for as long
as that store is alive and is reused by every query against it.
"""

from functools import lru_cache
from typing import Dict, FrozenSet, Mapping, Set

from boxman.components import Position
from boxman.types import EntityID


@lru_cache(maxsize=4096)
def _position_index(
    position_store: Mapping[EntityID, Position],
) -> Mapping[Position, FrozenSet[EntityID]]:
    """Build a reverse index from position to entity IDs.

    Args:
        position_store (Mapping[EntityID, Position]): Mapping of entity IDs to positions.
    Returns:
        Mapping[Position, FrozenSet[EntityID]]: Mapping from positions to sets of entity IDs.
    """
    index: Dict[Position, Set[EntityID]] = {}
    for eid, pos in position_store.items():
        index.setdefault(pos, set()).add(eid)
    return {pos: frozenset(eids) for pos, eids in index.items()}


def entities_at(
    position_store: Mapping[EntityID, Position], pos: Position
) -> FrozenSet[EntityID]:
    """Return entity IDs at the given position."""
    return _position_index(position_store).get(pos, frozenset())
