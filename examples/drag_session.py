"""Example: a drag session against a JSON store, printing each layout pass."""

import tempfile
from pathlib import Path

from hillchart import HillChartEngine, MarkerStore


def _show(frame) -> None:
    for entry in frame.placed:
        flag = "*" if entry.focus else " "
        print(f"  {flag} {entry.marker.label:<10} x={entry.x:7.2f} y={entry.y:7.2f} depth={entry.stack_depth}")
    print(f"  guide: {frame.guide_segments}")


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = MarkerStore(Path(tmp) / "markers.json")
        engine = HillChartEngine(store=store)
        engine.add("Design", progress=0.1)
        engine.add("Build", progress=0.12)
        engine.add("Review", progress=0.5)

        print("Initial:")
        _show(engine.layout())

        engine.begin_drag(2)
        for target in (400.0, 520.0, 600.0):
            print(f"Dragging Build to {target}:")
            _show(engine.move_to(target))
        engine.end_drag(2)

        reloaded = HillChartEngine.from_store(MarkerStore(store.path))
        print("After reload:")
        _show(reloaded.layout())


if __name__ == "__main__":
    main()
