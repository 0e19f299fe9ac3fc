from . import HillChartEngine, format_export_text

DEMO = [
    ("Research competitors", 0.10),
    ("Draft API", 0.12),
    ("Ship beta", 0.90),
]


def run():
    engine = HillChartEngine()
    for label, progress in DEMO:
        engine.add(label, progress=progress)

    frame = engine.layout()
    print("Placed markers:")
    for entry in frame.placed:
        print(f"  {entry.marker.label}: ({entry.x:.2f}, {entry.y:.2f}) depth={entry.stack_depth}")

    engine.drag(2, engine.options.position_of(0.5))
    frame = engine.layout()
    print(f"\nAfter dragging 'Draft API' to the top (focus={frame.focus_id}):")
    for entry in frame.placed:
        print(f"  {entry.marker.label}: ({entry.x:.2f}, {entry.y:.2f}) depth={entry.stack_depth}")
    print(f"Guide segments: {frame.guide_segments}")

    print(f"\nMilestones:\n{format_export_text(engine.export())}")


if __name__ == "__main__":
    run()
