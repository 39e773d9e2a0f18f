"""
Command-line interface for running rough cut experiments.

Usage:
    python -m rough_cut_model                       # built-in reference data
    python -m rough_cut_model configs/reference.json
    python -m rough_cut_model configs/*.json --output-dir results/
    python -m rough_cut_model configs/reference.json --stdout
    python -m rough_cut_model --projects 8 --plot
"""

import argparse
import sys
import json
from pathlib import Path
from typing import List, Optional

from .config import ExperimentConfig, default_config, load_config, validate_config
from .formatter import colorize, supports_color, rule
from .output import OutputWriter
from .report import format_run_summary
from .runner import Runner, save_result, generate_output_filename
from .plot import plot_result, HAS_MATPLOTLIB as HAS_PLOT


def _print_summary(text: str, use_color: bool) -> None:
    """Print summary with optional ANSI colorization."""
    print(colorize(text) if use_color else text)


def _load(config_path: Optional[Path]) -> Optional[ExperimentConfig]:
    """Load a config file, or the built-in reference config when no path is given."""
    if config_path is None:
        return default_config()
    try:
        return load_config(config_path)
    except FileNotFoundError:
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
    except (json.JSONDecodeError, ValueError) as e:
        print(f"Error: Invalid JSON in {config_path}: {e}", file=sys.stderr)
    except KeyError as e:
        print(f"Error: Missing scenario field {e} in {config_path}", file=sys.stderr)
    except (TypeError, AttributeError) as e:
        # e.g. "baseline": null, or a scenario entry that is not an object
        print(f"Error: Malformed config {config_path}: {e}", file=sys.stderr)
    return None


def run_single_config(
    config_path: Optional[Path],
    output_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    stdout: bool = False,
    quiet: bool = False,
    projects: Optional[int] = None,
    plot: bool = False,
    plot_save_path: Optional[Path] = None,
) -> bool:
    """
    Run a single config file (or the built-in reference data).

    Returns True on success, False on failure.
    """
    config = _load(config_path)
    if config is None:
        return False
    label = str(config_path) if config_path else "built-in reference config"

    if projects is not None:
        config.projection.max_projects = projects

    errors = validate_config(config)
    if errors:
        print(f"Error: Invalid config {label}:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        return False

    try:
        runner = Runner(config, config_path=str(config_path) if config_path else None)
        result = runner.run()
    except ValueError as e:
        print(f"Error running {label}: {e}", file=sys.stderr)
        return False

    if stdout:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        if output_path is not None:
            save_result(result, output_path)
        else:
            if output_dir is None:
                output_dir = Path("results")
            # Full directory layout: <output_dir>/<name>_<timestamp>/
            run_dir = output_dir / Path(
                generate_output_filename(config, result.meta["timestamp"])
            ).stem
            OutputWriter(run_dir).write(result, generate_plots=HAS_PLOT)
            output_path = run_dir / "results.json"

        if not quiet:
            print(f"Results saved to: {output_path}")
            print()
            _print_summary(format_run_summary(result), supports_color())

    if plot:
        if not HAS_PLOT:
            print("Warning: --plot requires matplotlib. Install with: pip install -e '.[plot]'",
                  file=sys.stderr)
        else:
            if plot_save_path is None and output_path is not None:
                plot_save_path = output_path.with_suffix('.png')

            plot_result(result, save_path=plot_save_path, show=(plot_save_path is None))

            if plot_save_path and not quiet:
                print(f"Plot saved to: {plot_save_path}")

    return True


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run rough cut optimization time-savings analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s configs/reference.json
  %(prog)s configs/*.json --output-dir results/
  %(prog)s configs/reference.json --stdout
  %(prog)s configs/reference.json -o custom_output.json
  %(prog)s --projects 8 --plot --plot-save dashboard.png
        """,
    )

    parser.add_argument(
        "configs",
        nargs="*",
        type=Path,
        help="Config file(s) to run (default: built-in reference data)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output JSON file path (only valid with a single config)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory (default: results/)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print JSON result to stdout instead of saving",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress summary output (only save/print JSON)",
    )
    parser.add_argument(
        "--projects",
        type=int,
        default=None,
        help="Override the number of projects in the projection",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Generate dashboard plot (requires matplotlib)",
    )
    parser.add_argument(
        "--plot-save",
        type=Path,
        default=None,
        help="Save plot to file (defaults to output path with .png extension)",
    )

    args = parser.parse_args(argv)

    configs: List[Optional[Path]] = list(args.configs) or [None]

    if args.output and len(configs) > 1:
        parser.error("--output can only be used with a single config file")

    if args.stdout and args.output:
        parser.error("Cannot use --stdout with --output")

    success_count = 0
    fail_count = 0

    for config_path in configs:
        success = run_single_config(
            config_path,
            output_path=args.output,
            output_dir=args.output_dir,
            stdout=args.stdout,
            quiet=args.quiet,
            projects=args.projects,
            plot=args.plot,
            plot_save_path=args.plot_save,
        )
        if success:
            success_count += 1
        else:
            fail_count += 1

        if len(configs) > 1 and not args.stdout and not args.quiet:
            print("\n" + rule() + "\n")

    if len(configs) > 1 and not args.quiet:
        print(f"Completed: {success_count} succeeded, {fail_count} failed")

    return 0 if fail_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
