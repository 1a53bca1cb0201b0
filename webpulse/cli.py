"""CLI entrypoints for webpulse commands."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path

from .aggregator import ProjectAggregator
from .config import AnalysisConfig, ConfigError, load_config
from .estimation import calculate_performance_impact, estimate_resources
from .logging import configure_logging
from .models import ProjectRecord
from .report import display_potential_issues, display_report, display_resource_usage, display_specific_value

ESTIMATION_VALUES = {
    "js_heap_size": ("Total JS Heap Size", "MB"),
    "transferred_data": ("Transferred Data", "KB"),
    "resource_size": ("Resource Size", "KB"),
    "dom_content_loaded": ("DOMContentLoaded", "ms"),
    "largest_contentful_paint": ("Largest Contentful Paint (LCP)", "ms"),
}


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webpulse",
        description="Statically analyse web projects and estimate their resource usage.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyse a project and print the full report.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_path_argument(analyze_parser)
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the project record, estimation and impact score as JSON.",
    )
    analyze_parser.add_argument(
        "--salesforce",
        action="store_true",
        help="Look for Salesforce <CustomObject metadata in XML files.",
    )

    issues_parser = subparsers.add_parser(
        "issues",
        help="List potential issues found in a project.",
    )
    _add_verbose_option(issues_parser, suppress_default=True)
    _add_path_argument(issues_parser)

    estimate_parser = subparsers.add_parser(
        "estimate",
        help="Print the estimated resource usage of a project.",
    )
    _add_verbose_option(estimate_parser, suppress_default=True)
    _add_path_argument(estimate_parser)
    estimate_parser.add_argument(
        "--value",
        choices=sorted(ESTIMATION_VALUES),
        help="Print a single estimated value instead of the whole table.",
    )
    estimate_parser.add_argument(
        "--format",
        dest="value_format",
        choices=("MB", "KB", "ms", "raw"),
        help="Unit for --value (defaults to the value's natural unit).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for webpulse commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    json_output = bool(getattr(args, "json", False))
    configure_logging(verbose=bool(args.verbose), quiet=json_output)

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    project = _analyze(parser, args.path, salesforce=bool(getattr(args, "salesforce", False)))

    if args.command == "analyze":
        if json_output:
            payload = {
                "project": project.to_dict(),
                "estimation": dataclasses.asdict(estimate_resources(project)),
                "performance_impact": calculate_performance_impact(project),
            }
            print(json.dumps(payload, indent=2))
        else:
            display_report(project)
    elif args.command == "issues":
        display_potential_issues(project)
    elif args.command == "estimate":
        estimation = estimate_resources(project)
        if args.value:
            label, unit = ESTIMATION_VALUES[args.value]
            fmt = args.value_format or unit
            display_specific_value(label, getattr(estimation, args.value), "" if fmt == "raw" else fmt)
        else:
            display_resource_usage(estimation)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _analyze(parser: argparse.ArgumentParser, path: str, *, salesforce: bool) -> ProjectRecord:
    root = Path(path).expanduser().resolve()
    try:
        config = load_config(root) if root.is_dir() else AnalysisConfig(root=root)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if salesforce:
        config.salesforce = True

    project = ProjectAggregator(config).analyze(root)
    if project is None:
        parser.exit(1, f"webpulse could not analyse {_relativize(root)}\nRun with --verbose for more details.\n")
    return project


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
