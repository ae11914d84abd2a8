#!/usr/bin/env python3
"""
Command-line interface for kubeclean.

Provides the ``kubernetes clean`` command, which reports and deletes
ConfigMaps that no workload in a namespace references.
"""

import argparse
import sys

from kubeclean import __version__
from kubeclean.client import create_client
from kubeclean.errors import KubecleanError
from kubeclean.output import OutputManager, Verbosity, get_output, set_output
from kubeclean.reconciler import Reconciler, compile_filter
from kubeclean.resource_utils import CONFIG_MAP

# Resource kinds the clean command can handle, keyed by lowercase name
CLEANABLE_RESOURCES = {CONFIG_MAP.lower(): CONFIG_MAP}


def resource_kind(value: str) -> str:
    """Parse a --resource value case-insensitively."""
    try:
        return CLEANABLE_RESOURCES[value.lower()]
    except KeyError:
        choices = ", ".join(CLEANABLE_RESOURCES.values())
        raise argparse.ArgumentTypeError(f"invalid resource {value!r} (choose from {choices})")


def cmd_clean(args: argparse.Namespace) -> None:
    """Handle the kubernetes clean subcommand."""
    output = get_output()
    try:
        compile_filter(args.filter)
        client = create_client(context=args.context)
        reconciler = Reconciler(
            client,
            namespace=args.namespace,
            dry_run=args.dry_run,
            filter_pattern=args.filter,
            inverse_filter=args.inverse_filter,
            output=output,
        )
        result = reconciler.run()
    except KubecleanError as e:
        output.error(f"Error: {e}", suggestion=e.suggestion)
        sys.exit(1)
    except ValueError as e:
        output.error(f"Error: {e}")
        sys.exit(1)

    if not result.ok:
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubeclean",
        description="Kubeclean - Clean up unused Kubernetes resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kubeclean kubernetes clean --resource ConfigMap --dry-run
  kubeclean kubernetes clean --resource ConfigMap --namespace apps -v
  kubeclean kubernetes clean --resource ConfigMap --filter '^temp-'
  kubeclean kubernetes clean --resource ConfigMap --filter '-keep$' --inverse-filter

Candidate names are printed to stdout, one per line; diagnostics go to stderr.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    groups = parser.add_subparsers(dest="group", help="Resource groups", required=True)
    kubernetes_parser = groups.add_parser("kubernetes", help="Kubernetes resources")
    commands = kubernetes_parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    clean_parser = commands.add_parser(
        "clean",
        help="Clean up unused Kubernetes resources",
    )
    clean_parser.add_argument(
        "--resource",
        type=resource_kind,
        required=True,
        help="The kind of resource to clean up (ConfigMap)",
    )
    clean_parser.add_argument(
        "-n",
        "--namespace",
        help="Namespace to clean (defaults to the current kubeconfig context namespace)",
    )
    clean_parser.add_argument(
        "-c",
        "--context",
        help="kubeconfig context to use",
    )
    clean_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not perform any actions against the cluster, only report",
    )
    clean_parser.add_argument(
        "-f",
        "--filter",
        help="Only delete resources whose name matches this regular expression",
    )
    clean_parser.add_argument(
        "--inverse-filter",
        action="store_true",
        help="Turn --filter into a blacklist: only delete resources that do not match",
    )
    clean_parser.add_argument(
        "-v",
        dest="verbosity",
        action="count",
        default=0,
        help="Show more detailed logs (repeat to show more: info, debug, trace)",
    )
    clean_parser.set_defaults(func=cmd_clean)
    return parser


def main() -> None:
    """Main entry point for kubeclean CLI."""
    args = build_parser().parse_args()

    output_manager = OutputManager(verbosity=Verbosity.from_count(args.verbosity))
    set_output(output_manager)

    args.func(args)


if __name__ == "__main__":
    main()
