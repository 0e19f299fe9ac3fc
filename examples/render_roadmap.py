"""Example pipeline: place a few milestones and write the chart as SVG."""

import sys

from hillchart import HillChartEngine, format_export_text

MILESTONES = [
    ("Interview customers", 0.08),
    ("Pick a data model", 0.11),
    ("Prototype the editor", 0.35),
    ("Beta with design partners", 0.52),
    ("Public launch", 0.92),
]


def main() -> None:
    engine = HillChartEngine()
    for label, progress in MILESTONES:
        engine.add(label, progress=progress)

    frame = engine.layout()
    for entry in frame.placed:
        print(f"{entry.marker.label}: ({entry.x:.1f}, {entry.y:.1f}) depth={entry.stack_depth}")
    print(format_export_text(engine.export()))

    output = sys.argv[1] if len(sys.argv) > 1 else "roadmap.svg"
    engine.write_svg(output, title="Roadmap")
    print(f"Wrote {output}")


if __name__ == "__main__":
    main()
