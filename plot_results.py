#!/usr/bin/env python3
"""Plot serialization benchmark results with an interactive HTML chart."""

import html
import json
import sys
from pathlib import Path
from typing import List, Dict, Any, Optional
import argparse

TMP_DIR = Path(".tmp")


def find_latest_benchmark_dir(tmp_dir: Path = TMP_DIR) -> Path:
    """Find the latest benchmark directory."""
    if not tmp_dir.exists():
        raise FileNotFoundError(f"No {tmp_dir} directory found")

    benchmark_dirs = [p for p in tmp_dir.glob("serbench_*") if p.is_dir()]
    if not benchmark_dirs:
        raise FileNotFoundError("No benchmark directories found")

    # Newest first
    return max(benchmark_dirs, key=lambda p: p.stat().st_mtime)


def load_benchmark_data(results_dir: Path) -> Dict[str, Any]:
    """Load the results file written by run_benchmark.py."""
    results_file = results_dir / "results.json"

    if not results_file.exists():
        raise FileNotFoundError(f"No results.json found in {results_dir}")

    with open(results_file) as f:
        return json.load(f)


def flatten_results(results: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One row per phase, in run order."""
    flat_data = []
    for phase, metrics in results.items():
        flat_data.append({
            'phase': phase,
            'iterations': metrics.get('iterations', 0),
            'elapsed_ms': metrics['elapsed_ms'],
            'per_op_us': metrics.get('per_op_us', 0.0),
            'rss_delta_mb': metrics.get('rss_delta_mb', 0.0),
        })
    return flat_data


def print_ascii_chart(data: List[Dict], title: str, value_key: str, max_width: int = 60):
    """Print ASCII chart."""
    if not data:
        return

    print(f"\n📊 {title}")
    print("=" * 80)

    max_value = max(item[value_key] for item in data)

    for item in data:
        value = item[value_key]
        bar_length = int((value / max_value) * max_width) if max_value > 0 else 0
        bar = '█' * bar_length + '░' * (max_width - bar_length)
        print(f"{item['phase']:<20} {bar} {value:.1f}")


def print_table(data: List[Dict], title: str, columns: List[Dict]):
    """Print formatted table."""
    print(f"\n📋 {title}")
    print("=" * 80)

    header = " | ".join(f"{col['name']:<{col['width']}}" for col in columns)
    print(header)
    print("-" * len(header))

    for item in data:
        row_parts = []
        for col in columns:
            value = item.get(col['key'], 0)
            if isinstance(value, float):
                value = f"{value:.{col['precision']}f}"
            else:
                value = str(value)
            row_parts.append(f"{value:<{col['width']}}")

        print(" | ".join(row_parts))


def create_html_chart(data: List[Dict], title: str, y_key: str, chart_id: str) -> str:
    """Create Chart.js bar chart, one bar per phase."""
    if not data:
        return ""

    chart_config = {
        'type': 'bar',
        'data': {
            'labels': [item['phase'] for item in data],
            'datasets': [{
                'label': title,
                'data': [item[y_key] for item in data],
                'backgroundColor': '#36A2EB80',
                'borderColor': '#36A2EB',
                'borderWidth': 1,
            }],
        },
        'options': {
            'responsive': True,
            'scales': {
                'y': {
                    'title': {'display': True, 'text': y_key.replace('_', ' ').title()},
                    'beginAtZero': True,
                }
            },
            'plugins': {
                'title': {'display': True, 'text': title}
            }
        }
    }

    return f"""
    <div style="width: 100%; height: 400px; margin: 20px 0;">
        <canvas id="chart_{chart_id}"></canvas>
    </div>
    <script>
        new Chart(document.getElementById('chart_{chart_id}'), {json.dumps(chart_config)});
    </script>
    """


def generate_html_report(flat_data: List[Dict], output_file: Path, metadata: Optional[Dict[str, Any]] = None):
    """Generate HTML report with charts and the sample documents."""
    metadata = metadata or {}

    html_content = f"""
<!DOCTYPE html>
<html>
<head>
    <title>Serialization Benchmark Report</title>
    <script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 20px; }}
        .header {{ text-align: center; margin-bottom: 30px; }}
        .chart-container {{ margin: 30px 0; }}
        .summary {{ background: #f5f5f5; padding: 20px; border-radius: 5px; margin: 20px 0; }}
        pre {{ background: #e9ecef; padding: 10px; border-radius: 3px; }}
        table {{ width: 100%; border-collapse: collapse; margin: 20px 0; }}
        th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
        th {{ background-color: #f2f2f2; }}
    </style>
</head>
<body>
    <div class="header">
        <h1>🚀 Serialization Benchmark Results</h1>
    </div>

    <div class="summary">
        <h2>📊 Summary</h2>
        <p><strong>Phases:</strong> {', '.join(item['phase'] for item in flat_data)}</p>
        <p><strong>Iterations per phase:</strong> {metadata.get("iterations", "Unknown")}</p>
        <p><strong>Python:</strong> {metadata.get("python", "Unknown")} on {metadata.get("platform", "Unknown")}</p>
        <p><strong>Timestamp:</strong> {metadata.get("timestamp", "Unknown")}</p>
    </div>

    <div class="chart-container">
        <h2>📈 Timing Charts</h2>
        {create_html_chart(flat_data, "Elapsed (ms)", "elapsed_ms", "elapsed")}
        {create_html_chart(flat_data, "Per Operation (µs)", "per_op_us", "per_op")}
    </div>

    <div class="chart-container">
        <h2>📋 Detailed Results Table</h2>
        <table>
            <tr>
                <th>Phase</th>
                <th>Iterations</th>
                <th>Elapsed (ms)</th>
                <th>Per op (µs)</th>
                <th>RSS delta (MB)</th>
            </tr>
"""

    for item in flat_data:
        html_content += f"""
            <tr>
                <td>{item['phase']}</td>
                <td>{item['iterations']}</td>
                <td>{item['elapsed_ms']:.1f}</td>
                <td>{item['per_op_us']:.3f}</td>
                <td>{item['rss_delta_mb']:.2f}</td>
            </tr>
"""

    html_content += f"""
        </table>
    </div>

    <div class="summary">
        <h2>🧾 Sample Documents</h2>
        <h3>CSV</h3>
        <pre>{html.escape(metadata.get("csv_example", ""))}</pre>
        <h3>JSON</h3>
        <pre>{html.escape(metadata.get("json_example", ""))}</pre>
    </div>
</body>
</html>
"""

    with open(output_file, 'w') as f:
        f.write(html_content)


def main(argv: Optional[List[str]] = None) -> int:
    """Main plotting function."""
    parser = argparse.ArgumentParser(description="Plot serialization benchmark results")
    parser.add_argument("--dir", help="Specific benchmark directory to use")
    parser.add_argument("--no-html", action="store_true", help="Skip HTML report generation")
    parser.add_argument("--output", help="HTML output filename (default: <dir>/report.html)")

    args = parser.parse_args(argv)

    try:
        if args.dir:
            results_dir = Path(args.dir)
            if not results_dir.exists():
                raise FileNotFoundError(f"Directory {results_dir} does not exist")
        else:
            results_dir = find_latest_benchmark_dir()

        print(f"📁 Using data from: {results_dir}")

        print("📊 Loading benchmark data...")
        full_data = load_benchmark_data(results_dir)
    except FileNotFoundError as e:
        print(f"❌ Error: {e}")
        return 1

    metadata = full_data.get('metadata', {})
    flat_data = flatten_results(full_data.get('results', {}))

    if not flat_data:
        print("❌ No benchmark data found")
        return 1

    print(f"✅ Loaded {len(flat_data)} phase results")

    print_ascii_chart(flat_data, "Elapsed (ms)", 'elapsed_ms')
    print_ascii_chart(flat_data, "Per Operation (µs)", 'per_op_us')

    print_table(flat_data, "Phase Results", [
        {'name': 'Phase', 'key': 'phase', 'width': 20, 'precision': 0},
        {'name': 'Iterations', 'key': 'iterations', 'width': 10, 'precision': 0},
        {'name': 'Elapsed(ms)', 'key': 'elapsed_ms', 'width': 12, 'precision': 1},
        {'name': 'Per op(µs)', 'key': 'per_op_us', 'width': 10, 'precision': 3},
        {'name': 'RSS Δ(MB)', 'key': 'rss_delta_mb', 'width': 9, 'precision': 2},
    ])

    if not args.no_html:
        output_file = Path(args.output) if args.output else results_dir / "report.html"
        print(f"\n🌐 Generating HTML report: {output_file}")
        generate_html_report(flat_data, output_file, metadata)
        print(f"✅ HTML report saved to: {output_file}")
        print(f"🔗 Open report: file://{output_file.absolute()}")
    else:
        print("\n⏭️  Skipping HTML report generation (--no-html specified)")

    print(f"\n🎉 Analysis complete! Data from: {results_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
