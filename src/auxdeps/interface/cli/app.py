from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates a formula inspection: logging bootstrap, formula loading
(argument, file or stdin), execution of the requested pipeline stage and
JSON rendering. Failures are mapped to exit codes so the inspector can be
used from scripts.
"""

import json
import sys
from typing import Any, List, Optional

from auxdeps.dependencies import (
    calculate_aux_dependencies,
    calculate_flat_aux_dependencies,
    dependency_tree,
    flatten,
    replace_aux_dependencies,
    simplify,
)
from auxdeps.domain import options as opts
from auxdeps.domain.dependency_models import node_to_dict, nodes_to_dicts
from auxdeps.domain.errors import DependencyError, FormulaSyntaxError
from auxdeps.infra.logging import LoggingConfig, configure_logging, get_logger
from auxdeps.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_SYNTAX_ERROR = 2
EXIT_AMBIGUOUS = 3

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    options = cli_args.args_to_options(args)

    # 2. Formula loading
    try:
        formula = _read_formula(args.formula, args.formula_file)
    except OSError as e:
        logger.error(f"Cannot read formula: {e}")
        print(f"ERROR: Cannot read formula: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logger.debug(f"Analyzing formula ({options.stage} stage): {formula!r}")

    # 3. Analysis
    try:
        payload = run_stage(formula, options)
    except FormulaSyntaxError as e:
        print(f"ERROR: Syntax error: {e.msg}", file=sys.stderr)
        return EXIT_SYNTAX_ERROR
    except DependencyError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_AMBIGUOUS
    except Exception as e:
        logger.critical(f"Analysis failed: {e}", exc_info=True)
        print(f"ERROR: Analysis failed: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 4. Output rendering
    print(json.dumps(payload, ensure_ascii=False, indent=options.indent))
    return EXIT_OK


def run_stage(formula: str, options: opts.AnalysisOptions) -> Any:
    """
    Run the analysis pipeline up to the requested stage.

    Args:
        formula: Formula source text.
        options: Inspection options.

    Returns:
        Any: JSON-compatible rendering of the stage output.
    """
    if not options.strict:
        if options.stage == opts.STAGE_AUX:
            return nodes_to_dicts(calculate_aux_dependencies(formula))
        if options.stage == opts.STAGE_FLAT:
            return nodes_to_dicts(calculate_flat_aux_dependencies(formula))

    tree = dependency_tree(formula)
    if options.stage == opts.STAGE_TREE:
        return node_to_dict(tree)

    nodes = simplify(tree)
    if options.stage == opts.STAGE_SIMPLE:
        return nodes_to_dicts(nodes)

    nodes = replace_aux_dependencies(nodes)
    if options.stage == opts.STAGE_FLAT:
        nodes = flatten(nodes)
    return nodes_to_dicts(nodes)

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _read_formula(formula: Optional[str], formula_file: Optional[str]) -> str:
    """Resolve the formula from the argument, a file, or stdin."""
    if formula is not None:
        return formula
    if formula_file:
        with open(formula_file, "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
