from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, TypedDict

import matplotlib.pyplot as plt
import numpy as np

from classifiers.knn import KnnPredictor
from estimators.basic.dft import DFTPhasorEstimator
from estimators.basic.peak_asin import PeakAsinEstimator
from evaluation import metrics
from evaluation.plotting import plot_neighbor_distances, plot_signal_and_phasor
from scenarios.s1_synthetic.line_status import make_known_line_samples, make_unknown_line_sample
from scenarios.s1_synthetic.make_clean import make_clean
from utils.pmu.measurement import InstantaneousMeasurement, measurements_from_arrays
from utils.pmu.parameter import Parameter
from utils.pmu.phasor import Phasor, PhasorStatus


class Estimator(Protocol):
    """Estimator interface needed here."""

    def estimate(
        self, samples: Sequence[InstantaneousMeasurement]
    ) -> tuple[Phasor, PhasorStatus]:  # match concrete PeakAsinEstimator
        ...


class EstimationResult(TypedDict):
    name: str
    n_samples: int
    percent_error: float
    parameter: dict[str, float | int | str]


class PredictionResult(TypedDict):
    k: int
    truth: bool
    knn: dict[str, Any]


def run_estimation(
    estimator: Estimator,
    samples: Sequence[InstantaneousMeasurement],
    reference: Phasor,
    name: str = "unknown",
) -> EstimationResult:
    """Estimate a voltage parameter from a record and score it against the reference phasor."""
    param = Parameter.from_samples(samples, "V1", "V", 1, 0, estimator=estimator)
    return {
        "name": name,
        "n_samples": param.number_of_samples,
        "percent_error": metrics.phasor_percent_error(param.phasor, reference),
        "parameter": param.to_standard_dict(),
    }


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    fs: int = 32000
    f0 = 60.0
    reference = Phasor(120.0, 30.0)
    ks = (1, 3, 5)

    estimators: dict[str, Estimator] = {
        "PeakAsin": PeakAsinEstimator(),
        "DFT": DFTPhasorEstimator(config={"fs": fs, "nominal_hz": f0}),
    }

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    root_dir = Path("data/results") / f"line_status_{timestamp}"
    json_dir = root_dir / "jsons"
    plot_dir = root_dir / "plots"
    json_dir.mkdir(parents=True, exist_ok=True)
    plot_dir.mkdir(parents=True, exist_ok=True)

    # 1) phasor estimation accuracy
    print("▶ Running phasor estimation")
    t, signal = make_clean(reference.rms_value, reference.phase_angle_degrees, f0, 1.0, fs)
    samples = measurements_from_arrays(t, signal)

    estimation: list[EstimationResult] = []
    for name, est in estimators.items():
        res = run_estimation(est, samples, reference, name=name)
        estimation.append(res)
        print(f"  {name}: percent error {res['percent_error']:.6f}%")

        p = res["parameter"]
        fig = plot_signal_and_phasor(
            signal,
            Phasor(float(p["RMS"]), float(p["ANGLE_DEG"])),
            fs,
            f0=f0,
            reference=reference,
            title=name,
            zoom_windows_top=[(0.0, 0.02), (0.98, 1.0)],
            zoom_window_bottom=(0.0, 2.0 / f0),
        )
        plot_file = plot_dir / f"estimation_{name}.png"
        fig.savefig(plot_file, dpi=300, bbox_inches="tight")
        plt.close(fig)
        print(f"📈 Plot saved to {plot_file}")

    json_file = json_dir / "estimation.json"
    with json_file.open("w", encoding="utf-8") as fh:
        json.dump(estimation, fh, indent=2)
    print(f"✅ JSON saved to {json_file}")

    # 2) line status prediction
    print("▶ Running line status prediction")
    known = make_known_line_samples(n_working=6, n_not_working=4)

    predictions: list[PredictionResult] = []
    for truth in (True, False):
        unknown = make_unknown_line_sample(working=truth)
        knn = KnnPredictor(known, unknown, config={"k": ks[0]})
        for k in ks:
            knn.change_number_of_nearest_neighbors(k)
            print(knn.describe())
            predictions.append({"k": k, "truth": truth, "knn": knn.to_standard_dict()})

        fig = plot_neighbor_distances(knn, title=f"Unknown {'working' if truth else 'open'} line")
        plot_file = plot_dir / f"knn_{'working' if truth else 'open'}.png"
        fig.savefig(plot_file, dpi=300, bbox_inches="tight")
        plt.close(fig)
        print(f"📈 Plot saved to {plot_file}")

    accuracy = metrics.classification_accuracy(
        np.array([r["knn"]["PREDICTED_STATUS"] for r in predictions]),
        np.array([r["truth"] for r in predictions]),
    )
    print(f"  accuracy over {len(predictions)} runs: {accuracy:.3f}")

    json_file = json_dir / "predictions.json"
    with json_file.open("w", encoding="utf-8") as fh:
        json.dump(predictions, fh, indent=2)
    print(f"✅ JSON saved to {json_file}")

    index_file = root_dir / "summary.json"
    with index_file.open("w", encoding="utf-8") as fh:
        json.dump({"estimation": estimation, "accuracy": accuracy}, fh, indent=2)
    print(f"🗂 Summary saved to {index_file}")


if __name__ == "__main__":
    main()
