# region Imports
from __future__ import annotations
import json
from typing import Optional, Sequence

from city_partition.generator import PlacementConsumer
from city_partition.models import Placement
# endregion

# region JSON Export
def placements_to_json(placements: Sequence[Placement], generation: Optional[int] = None) -> dict:
    doc = {"placements": [p.to_dict() for p in placements]}
    if generation is not None:
        doc["generation"] = generation
    return doc


def write_placements_json(
    placements: Sequence[Placement],
    out_path: str = "city_placements.json",
    generation: Optional[int] = None,
) -> str:
    """Write placements as {"placements": [{x, y, category, archetype, height, y_offset, scale}, ...]}."""
    with open(out_path, "w") as f:
        json.dump(placements_to_json(placements, generation), f, indent=2)
    print(f"Wrote {len(placements)} placements to {out_path}")
    return out_path
# endregion

# region Consumer
class JsonFileConsumer(PlacementConsumer):
    """Rewrites out_path with the placements of every generated city."""

    def __init__(self, out_path: str = "city_placements.json"):
        self.out_path = out_path
        self.written = 0

    def clear(self) -> None:
        with open(self.out_path, "w") as f:
            json.dump({"placements": []}, f)

    def place(self, placements: Sequence[Placement]) -> None:
        write_placements_json(placements, self.out_path)
        self.written += 1
# endregion
