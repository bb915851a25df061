from __future__ import annotations

"""
Analysis Options Model.

Runtime options of a formula inspection, resolved from the command line.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

STAGE_TREE = "tree"
STAGE_SIMPLE = "simple"
STAGE_AUX = "aux"
STAGE_FLAT = "flat"

# Pipeline order
STAGES: Tuple[str, ...] = (STAGE_TREE, STAGE_SIMPLE, STAGE_AUX, STAGE_FLAT)
DEFAULT_STAGE = STAGE_AUX


@dataclass(frozen=True)
class AnalysisOptions:
    """
    Options of a single inspection run.

    Attributes:
        stage: Last pipeline stage to run (one of STAGES).
        strict: Propagate analysis failures instead of reporting no
            dependencies. The 'tree' and 'simple' stages are always strict.
        indent: JSON indentation, or None for compact output.
    """
    stage: str = DEFAULT_STAGE
    strict: bool = False
    indent: Optional[int] = 2
