#!/usr/bin/env python3
"""
Serialization Benchmark - CSV codec vs pydantic JSON on one fixed fixture.

Each phase runs the codec a fixed number of times against the same shared
Fixture instance and is timed as a single wall-clock sample. Garbage is
collected before every phase so leftovers from one phase don't land in the
next one's timing.
"""

import argparse
import json
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from serbench import Fixture
from serbench.codecs import CsvCodec, JsonCodec
from serbench.measure import PhaseResult, measure, repeat

DEFAULT_ITERATIONS = 100_000


def print_csv_block(csv_text: str) -> None:
    """Print the CSV round-trip content verbatim."""
    print("\n--- CSV OUTPUT ---")
    print(csv_text)
    print("--- END ---\n")


def run_phases(iterations: int) -> Dict[str, Any]:
    """Run every phase in order and print one timing line after each."""
    fixture = Fixture()
    csv_codec = CsvCodec(Fixture)
    json_codec = JsonCodec(Fixture)
    phases: List[PhaseResult] = []

    # --- CSV ---
    phase, csv_text = measure("csv_serialize", repeat(csv_codec.serialize, fixture, iterations), iterations)
    phases.append(phase)
    print(f"CSV serialize ({iterations} iters) = {phase.whole_ms} ms")

    phase, _ = measure("console_output", lambda: print_csv_block(csv_text))
    phases.append(phase)
    print(f"Console output time = {phase.whole_ms} ms")

    phase, obj_csv = measure("csv_deserialize", repeat(csv_codec.deserialize, csv_text, iterations), iterations)
    phases.append(phase)
    print(f"CSV deserialize ({iterations} iters) = {phase.whole_ms} ms")

    # --- JSON (pydantic) ---
    phase, json_text = measure("json_serialize", repeat(json_codec.serialize, fixture, iterations), iterations)
    phases.append(phase)
    print(f"{json_codec.name} serialize ({iterations} iters) = {phase.whole_ms} ms")

    phase, obj_json = measure("json_deserialize", repeat(json_codec.deserialize, json_text, iterations), iterations)
    phases.append(phase)
    print(f"{json_codec.name} deserialize ({iterations} iters) = {phase.whole_ms} ms")

    print("\nSanity:")
    print(f"objCsv != None: {obj_csv is not None}")
    print(f"objJson != None: {obj_json is not None}")
    print("\nJSON example:")
    print(json_text)

    return {
        "phases": phases,
        "csv": csv_text,
        "json": json_text,
        "obj_csv": obj_csv,
        "obj_json": obj_json,
    }


def save_results(out_dir: Path, iterations: int, run: Dict[str, Any]) -> Path:
    """Write phase results with run metadata to ``results.json``."""
    out_dir.mkdir(parents=True, exist_ok=True)
    results_data = {
        "metadata": {
            "iterations": iterations,
            "python": platform.python_version(),
            "platform": platform.platform(),
            "timestamp": datetime.now().isoformat(),
            "csv_example": run["csv"],
            "json_example": run["json"],
        },
        "results": {phase.name: phase.to_dict() for phase in run["phases"]},
    }

    results_path = out_dir / "results.json"
    with open(results_path, "w") as f:
        json.dump(results_data, f, indent=2)
    return results_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CSV vs JSON serialization benchmark")
    parser.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS,
                        help=f"Calls per phase (default: {DEFAULT_ITERATIONS})")
    parser.add_argument("--output-dir", type=Path,
                        help="Results directory (default: .tmp/serbench_<timestamp>)")
    parser.add_argument("--no-save", action="store_true", help="Don't write results.json")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the benchmark; parse errors propagate and end the run."""
    args = build_parser().parse_args(argv)

    if args.iterations < 1:
        print(f"❌ --iterations must be positive, got {args.iterations}", file=sys.stderr)
        return 2

    run = run_phases(args.iterations)

    if not args.no_save:
        out_dir = args.output_dir
        if out_dir is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            out_dir = Path(f".tmp/serbench_{timestamp}")
        results_path = save_results(out_dir, args.iterations, run)
        print(f"\n💾 Results saved: {results_path}")
        print(f"📊 Generate interactive HTML report: `python plot_results.py --dir {out_dir}`")

    return 0


if __name__ == "__main__":
    sys.exit(main())
