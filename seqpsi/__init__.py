"""
seqpsi: psi dissimilarity between multivariate sequences

Least-cost alignment of stratigraphic or time-series records normalized by
each record's internal variability (Birks & Gordon 1985).
"""

from .config import DistanceMethod, OutputFormat, PsiConfig, PipelineConfig
from .exceptions import (
    PsiError,
    InvalidMethod,
    DimensionMismatch,
    InsufficientGroups,
    InvalidInput,
    DegenerateAutosum,
    RaggedSequenceWarning,
)
from .sequences import Sequence, NamedSequenceSet
from .distances import distance, distance_matrix, auto_sum, least_cost_matrix, least_cost
from .scoring import psi, PairResult, PsiResultSet
from .pairwise import compute_autosums, compute_pair, compute_all_pairs
from .formatting import format_psi
from .io_adapters import from_pandas, read_sequences
from .api import workflow_psi, run_psi

__version__ = "0.1.0"

__all__ = [
    'DistanceMethod',
    'OutputFormat',
    'PsiConfig',
    'PipelineConfig',
    'PsiError',
    'InvalidMethod',
    'DimensionMismatch',
    'InsufficientGroups',
    'InvalidInput',
    'DegenerateAutosum',
    'RaggedSequenceWarning',
    'Sequence',
    'NamedSequenceSet',
    'distance',
    'distance_matrix',
    'auto_sum',
    'least_cost_matrix',
    'least_cost',
    'psi',
    'PairResult',
    'PsiResultSet',
    'compute_autosums',
    'compute_pair',
    'compute_all_pairs',
    'format_psi',
    'from_pandas',
    'read_sequences',
    'workflow_psi',
    'run_psi',
]
