import matplotlib

matplotlib.use("Agg")

import pandas as pd

from hover_tracks.plots import plot_heat_points, plot_smoothed_paths


def test_plots_write_figures(tmp_path):
    raw = pd.DataFrame({"aircraft_id": ["a", "a"], "latitude": [52.0, 52.1], "longitude": [9.0, 9.1]})
    smoothed = pd.DataFrame({"aircraft_id": ["a"] * 3, "step": [0, 1, 2], "latitude": [52.0, 52.05, 52.1], "longitude": [9.0, 9.05, 9.1]})
    plot_smoothed_paths(raw, smoothed, tmp_path / "paths.png")
    points = pd.DataFrame({"latitude": [52.0, 52.0, 52.1], "longitude": [9.0, 9.0, 9.1], "weight": [1.0, 1.0, 1.0]})
    plot_heat_points(points, tmp_path / "heat.png", gridsize=10)
    assert (tmp_path / "paths.png").exists()
    assert (tmp_path / "heat.png").exists()


def test_empty_inputs_write_nothing(tmp_path):
    empty = pd.DataFrame(columns=["aircraft_id", "latitude", "longitude", "weight"])
    plot_smoothed_paths(empty, empty, tmp_path / "paths.png")
    plot_heat_points(empty, tmp_path / "heat.png")
    assert not any(tmp_path.iterdir())
