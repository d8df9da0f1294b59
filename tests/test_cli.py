import pandas as pd
import pytest
import yaml

import cli
from hover_tracks.config import InvalidConfiguration, get_nested, load_config
from hover_tracks.polyline import encode


def _write_inputs(tmp_path):
    positions = tmp_path / "positions.csv"
    positions.write_text(
        "aircraft_id,timestamp,latitude,longitude\n"
        "h1,2024-05-01T10:00:00Z,52.0,9.0\n"
        "h1,2024-05-01T10:00:10Z,52.01,9.02\n"
        "h1,2024-05-01T10:00:20Z,52.03,9.025\n",
        encoding="utf-8",
    )
    events = tmp_path / "events.csv"
    pd.DataFrame(
        {
            "aircraft_id": ["h1", "h1", "h2", "h3"],
            "encoded_path": [encode([(52.0, 9.0)]), encode([(52.0, 9.0)]), "_p~iF", encode([(50.0, 8.0)])],
            "hover_duration": [100, 200, 50, 10],
            "occurred_at": ["2024-04-30T00:00:00Z", "2024-04-29T00:00:00Z", "2024-04-28T00:00:00Z", "2024-03-01T00:00:00Z"],
        }
    ).to_csv(events, index=False)
    return positions, events


def _write_config(tmp_path, **overrides):
    positions, events = _write_inputs(tmp_path)
    cfg = {
        "logging": {"dir": str(tmp_path / "logs"), "level": "INFO"},
        "input": {"positions_csv": str(positions), "hover_events": str(events)},
        "smoothing": {"sharpness": 0.9, "resolution": 20},
        "hover": {"window_days": 7, "reference_time": "2024-05-01T00:00:00Z", "top_n": 3},
        "heatmap": {"window_days": 30},
        "output": {"dir": str(tmp_path / "out")},
    }
    cfg.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_pipeline_writes_outputs(tmp_path):
    cli.main(str(_write_config(tmp_path)))
    csv_dir = tmp_path / "out" / "csv"

    smoothed = pd.read_csv(csv_dir / "smoothed_paths.csv")
    assert len(smoothed) == 21

    profiles = pd.read_csv(csv_dir / "hover_profiles.csv")
    assert profiles["aircraft_id"].tolist() == ["h1", "h2"]
    assert profiles["total_hover_duration"].tolist() == [300.0, 50.0]

    # h3 falls outside the 30 day heatmap window and h2 has a broken path.
    heat = pd.read_csv(csv_dir / "heat_points.csv")
    assert len(heat) == 2
    dropped = pd.read_csv(csv_dir / "dropped_events.csv")
    assert dropped["aircraft_id"].tolist() == ["h2"]
    assert (tmp_path / "logs" / "hover_tracks.log").exists()


def test_invalid_smoothing_config_rejected(tmp_path):
    path = _write_config(tmp_path, smoothing={"sharpness": 2.0, "resolution": 20})
    with pytest.raises(InvalidConfiguration):
        cli.main(str(path))


def test_config_helpers(tmp_path):
    path = _write_config(tmp_path)
    cfg = load_config(path)
    assert get_nested(cfg, ["smoothing", "resolution"], 500) == 20
    assert get_nested(cfg, ["smoothing", "missing"], 7) == 7
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) == {}


def test_null_config_sections_fall_back_to_defaults(tmp_path):
    # An empty "hover:" block parses as null; defaults apply (7 days back from now).
    path = _write_config(tmp_path, hover=None, heatmap=None)
    cli.main(str(path))
    csv_dir = tmp_path / "out" / "csv"

    assert pd.read_csv(csv_dir / "hover_profiles.csv").empty
    assert pd.read_csv(csv_dir / "heat_points.csv").empty
    assert len(pd.read_csv(csv_dir / "smoothed_paths.csv")) == 21
