from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the formula inspector and translates
the parsed namespace into domain options.
"""

import argparse

from auxdeps.domain.options import DEFAULT_STAGE, STAGES, AnalysisOptions

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the auxdeps CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="auxdeps",
        description="Print the static dependencies of a bot formula as JSON.",
    )

    # --- Formula Source ---
    p.add_argument(
        "formula",
        nargs="?",
        default=None,
        help="Formula source. Read from --file or stdin when omitted.",
    )
    p.add_argument(
        "-f", "--file",
        dest="formula_file",
        default=None,
        help="Read the formula from this file.",
    )

    # --- Analysis ---
    p.add_argument(
        "--stage",
        choices=STAGES,
        default=DEFAULT_STAGE,
        help="Pipeline stage to print (default: %(default)s).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on formulas that cannot be analyzed instead of printing [].",
    )

    # --- Output ---
    p.add_argument(
        "--compact",
        action="store_true",
        help="Print JSON on a single line.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_options(args: argparse.Namespace) -> AnalysisOptions:
    """
    Translate the argparse Namespace into analysis options.

    Args:
        args: Parsed command-line arguments.

    Returns:
        AnalysisOptions: The resolved options.
    """
    return AnalysisOptions(
        stage=args.stage,
        strict=bool(args.strict),
        indent=None if args.compact else 2,
    )
