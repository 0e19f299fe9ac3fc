import argparse
import logging
import sys
from typing import Optional, Sequence

from hillchart import (
    HillChartEngine,
    MarkerStore,
    format_export_json,
    format_export_text,
)
from hillchart.model import MarkerId

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _resolve_id(engine: HillChartEngine, raw: str) -> Optional[MarkerId]:
    """Map a command-line id to the stored id, which may be numeric."""
    for marker in engine.markers:
        if str(marker.id) == raw:
            return marker.id
    logger.warning("Unknown marker id %s", raw)
    return None


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out milestones on a hill chart")
    parser.add_argument("path", help="Path to the JSON marker store")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove all markers before applying other edits",
    )
    parser.add_argument(
        "--add",
        action="append",
        default=[],
        metavar="LABEL",
        help="Add a milestone with the given label (repeatable)",
    )
    parser.add_argument(
        "--at",
        type=float,
        default=None,
        metavar="PROGRESS",
        help="Progress in [0, 1] for milestones added with --add",
    )
    parser.add_argument(
        "--remove",
        action="append",
        default=[],
        metavar="ID",
        help="Remove the milestone with the given id (repeatable)",
    )
    parser.add_argument(
        "--move",
        action="append",
        default=[],
        nargs=2,
        metavar=("ID", "PROGRESS"),
        help="Drag a milestone to the given progress (repeatable)",
    )
    parser.add_argument(
        "--nudge",
        action="append",
        default=[],
        nargs=2,
        metavar=("ID", "DX"),
        help="Shift a milestone label horizontally (repeatable)",
    )
    parser.add_argument(
        "--export",
        choices=["text", "json"],
        default="text",
        help="Format of the milestone listing (default: text)",
    )
    parser.add_argument(
        "--svg-output-path",
        help="Write the rendered chart as an SVG file to the given path",
    )
    parser.add_argument("--title", help="Title embedded in the SVG output")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    store = MarkerStore(args.path)
    engine = HillChartEngine.from_store(store)

    if args.clear:
        engine.clear()
    for label in args.add:
        engine.add(label, progress=args.at)
    for raw in args.remove:
        marker_id = _resolve_id(engine, raw)
        if marker_id is not None:
            engine.remove(marker_id)
    for raw, progress in args.move:
        marker_id = _resolve_id(engine, raw)
        if marker_id is not None:
            engine.drag(marker_id, engine.options.position_of(float(progress)))
    for raw, delta in args.nudge:
        marker_id = _resolve_id(engine, raw)
        if marker_id is not None:
            engine.nudge(marker_id, float(delta))

    frame = engine.layout()
    print("Layout:")
    if frame.placed:
        for entry in frame.placed:
            flag = " (focus)" if entry.focus else ""
            print(
                f"  {entry.marker.id}: x={entry.x:.2f} y={entry.y:.2f} depth={entry.stack_depth}{flag}"
            )
    else:
        print("  (none)")
    print("Guide segments:")
    for start, end in frame.guide_segments:
        print(f"  {start:.2f} -> {end:.2f}")

    rows = engine.export()
    print("Milestones:")
    if args.export == "json":
        print(format_export_json(rows))
    elif rows:
        print(format_export_text(rows))
    else:
        print("  (none)")

    if args.svg_output_path:
        output_path = engine.write_svg(args.svg_output_path, title=args.title)
        print(f"SVG chart written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
