import json

import pytest

from hillchart.model import HillOptions, Marker, StoreError
from hillchart.store import MarkerStore, marker_from_record, marker_to_record, markers_from_records


def test_missing_file_loads_empty(tmp_path):
    assert MarkerStore(tmp_path / "absent.json").load() == []


def test_round_trip_keeps_fields(tmp_path):
    store = MarkerStore(tmp_path / "m.json")
    store.save([Marker(7, "Ship it", 775.0, priority_rank=4, label_offset=-8.0)])

    (loaded,) = store.load()

    assert loaded == Marker(7, "Ship it", 775.0, priority_rank=4, label_offset=-8.0)
    raw = json.loads((tmp_path / "m.json").read_text(encoding="utf-8"))
    assert raw[0]["progress"] == pytest.approx(0.75)


def test_legacy_records_are_read():
    options = HillOptions()

    marker = marker_from_record({"id": 1700000000000, "name": "Old", "x": 320, "progress": 0.1}, options)

    assert marker.label == "Old"
    assert marker.position == 320.0
    assert marker.priority_rank == 0
    assert marker.label_offset == 0.0


def test_position_recovered_from_progress_then_default():
    options = HillOptions()

    from_progress = marker_from_record({"id": 1, "label": "p", "progress": 0.5}, options)
    from_default = marker_from_record({"id": 2, "label": "d"}, options)

    assert from_progress.position == pytest.approx(600.0)
    assert from_default.position == pytest.approx(320.0)


def test_out_of_range_positions_are_clamped():
    marker = marker_from_record({"id": 1, "label": "x", "position": 10_000}, HillOptions())

    assert marker.position == 950.0


def test_bad_records_are_skipped():
    options = HillOptions()
    records = [
        {"id": 1, "label": "ok"},
        "not a record",
        {"label": "no id"},
        {"id": 1, "label": "duplicate"},
        {"id": 2, "label": "rank", "priorityRank": "3"},
    ]

    markers = markers_from_records(records, options)

    assert [m.id for m in markers] == [1, 2]
    assert markers[1].priority_rank == 3


def test_record_serialisation_uses_camel_case_keys():
    record = marker_to_record(Marker("a", "A", 250.0, 2, 1.5), HillOptions())

    assert record == {
        "id": "a",
        "label": "A",
        "position": 250.0,
        "progress": 0.0,
        "priorityRank": 2,
        "labelOffset": 1.5,
    }


@pytest.mark.parametrize("payload", ["{not json", '{"id": 1}'])
def test_unreadable_store_raises(tmp_path, payload):
    path = tmp_path / "broken.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(StoreError):
        MarkerStore(path).load()
