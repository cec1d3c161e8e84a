"""Command-line interface for piegraph.

Usage:
    piegraph render <file> --output <chart.svg>
    piegraph keys <file>
    piegraph --version

The input table holds one row per category. The label column (the first
column unless ``--label-column`` is given) names the categories; every
numeric column is added as a data series.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from piegraph import CanvasConfig, PieConfig, PieGraph, __version__

# (option, help, default) for every boolean pie option
_BOOL_FLAGS = [
    ("show_split", "split border between wedges", True),
    ("show_shadow", "drop shadow", True),
    ("show_data_labels", "text labels on the pie", False),
    ("show_actual_values", "raw values in data labels", False),
    ("show_percent", "percentages in data labels", True),
    ("show_key_data_labels", "category names in data labels", True),
    ("show_key_actual_values", "raw values in the key", True),
    ("show_key_percent", "percentages in the key", False),
    ("expanded", "explode every wedge", False),
    ("expand_greatest", "explode the largest wedge", False),
]


def _add_pie_options(parser: argparse.ArgumentParser) -> None:
    for name, help_text, default in _BOOL_FLAGS:
        flag = name.replace("_", "-")
        parser.add_argument(
            f"--{flag}",
            dest=name,
            action=argparse.BooleanOptionalAction,
            default=default,
            help=f"Toggle {help_text} (default: {'on' if default else 'off'})",
        )
    parser.add_argument("--shadow-offset", type=float, default=10, help="Shadow offset (default: 10)")
    parser.add_argument("--expand-gap", type=float, default=10, help="Explosion gap (default: 10)")
    parser.add_argument(
        "--datapoint-font-size",
        type=float,
        default=12,
        help="Data label font size in px (default: 12)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="piegraph",
        description="piegraph - SVG pie charts from tabular data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  piegraph render sales.csv --output sales.svg
  piegraph render sales.csv -o sales.svg --label-column month --expanded
  piegraph keys sales.csv --show-key-percent
        """,
    )

    parser.add_argument(
        "--version", "-v", action="version", version=f"piegraph {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser(
        "render",
        help="Render a pie chart to SVG",
        description="Sum the numeric columns per category and draw them as a pie.",
    )
    render_parser.add_argument("file", type=str, help="Path to the data file (CSV, Parquet or JSON)")
    render_parser.add_argument(
        "--output", "-o", type=str, required=True, help="Output path for the SVG chart"
    )
    render_parser.add_argument(
        "--label-column", "-l", type=str, default=None, help="Column holding category names"
    )
    render_parser.add_argument("--title", "-t", type=str, default=None, help="Chart title")
    render_parser.add_argument("--width", type=int, default=500, help="Width in px (default: 500)")
    render_parser.add_argument("--height", type=int, default=300, help="Height in px (default: 300)")
    render_parser.add_argument(
        "--no-legend", action="store_true", help="Do not draw the key box"
    )
    render_parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress progress output"
    )
    _add_pie_options(render_parser)

    # Keys command
    keys_parser = subparsers.add_parser(
        "keys",
        help="Print legend entries as JSON",
        description="Sum the numeric columns per category and print the key lines.",
    )
    keys_parser.add_argument("file", type=str, help="Path to the data file (CSV, Parquet or JSON)")
    keys_parser.add_argument(
        "--label-column", "-l", type=str, default=None, help="Column holding category names"
    )
    _add_pie_options(keys_parser)

    return parser


def load_data(file_path: str):
    """Load a table from a CSV, Parquet or JSON file.

    Args:
        file_path: Path to the data file

    Returns:
        pandas DataFrame
    """
    import pandas as pd

    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = path.suffix.lower()

    if suffix == ".csv":
        return pd.read_csv(file_path)
    elif suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif suffix == ".json":
        return pd.read_json(file_path)
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Use CSV, Parquet, or JSON.")


def pie_config_from_args(args: argparse.Namespace) -> PieConfig:
    options = {name: getattr(args, name) for name, _, _ in _BOOL_FLAGS}
    options.update(
        shadow_offset=args.shadow_offset,
        expand_gap=args.expand_gap,
        datapoint_font_size=args.datapoint_font_size,
    )
    return PieConfig(**options)


def build_graph(args: argparse.Namespace, canvas=None) -> PieGraph:
    """Load the input file and build a graph with one series per numeric column."""
    data = load_data(args.file)
    label_column = args.label_column or str(data.columns[0])
    if label_column not in data.columns:
        raise ValueError(f"Label column not found: {label_column}")
    fields = [str(v) for v in data[label_column].drop_duplicates().tolist()]
    graph = PieGraph(fields, config=pie_config_from_args(args), canvas=canvas)
    graph.add_frame(data, label_column=label_column)
    return graph


def cmd_render(args: argparse.Namespace) -> int:
    """Execute the render command."""
    if not args.quiet:
        print(f"Loading data from: {args.file}")

    try:
        canvas = CanvasConfig(
            width=args.width,
            height=args.height,
            title=args.title,
            show_legend=not args.no_legend,
        )
        graph = build_graph(args, canvas=canvas)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    chart = graph.render()

    try:
        chart.save_svg(args.output)
    except OSError as e:
        print(f"Error saving chart: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Chart saved to: {args.output}")

    return 0


def cmd_keys(args: argparse.Namespace) -> int:
    """Execute the keys command."""
    try:
        graph = build_graph(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(graph.keys(), indent=2))
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "render":
        return cmd_render(args)
    elif args.command == "keys":
        return cmd_keys(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
