"""
Configuration schemas for seqpsi.

Method and output names are closed enumerations, parsed once where they enter
the package (function arguments, YAML files, command line). Everything below
that boundary works with the enum members.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import InvalidMethod


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_").replace(".", "_").replace(" ", "_")


class DistanceMethod(Enum):
    """Pointwise distance between two samples."""

    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    CHI = "chi"
    HELLINGER = "hellinger"

    @property
    def code(self) -> int:
        """Integer tag passed to the compiled kernels."""
        return _METHOD_CODES[self]

    @classmethod
    def parse(cls, method: "DistanceMethod | str") -> "DistanceMethod":
        """
        Resolve a method name (case-insensitive, common synonyms accepted).

        Raises
        ------
        InvalidMethod
            If ``method`` does not name one of the four metrics.
        """
        if isinstance(method, cls):
            return method
        if not isinstance(method, str):
            raise InvalidMethod(f"Distance method must be a string, got {type(method).__name__}")
        resolved = _METHOD_ALIASES.get(_normalize_name(method))
        if resolved is None:
            raise InvalidMethod(
                f"Unknown distance method: {method!r}. "
                f"Available: {[m.value for m in cls]}"
            )
        return resolved


_METHOD_CODES: Dict[DistanceMethod, int] = {
    DistanceMethod.MANHATTAN: 0,
    DistanceMethod.EUCLIDEAN: 1,
    DistanceMethod.CHI: 2,
    DistanceMethod.HELLINGER: 3,
}

_METHOD_ALIASES: Dict[str, DistanceMethod] = {
    "manhattan": DistanceMethod.MANHATTAN,
    "cityblock": DistanceMethod.MANHATTAN,
    "city_block": DistanceMethod.MANHATTAN,
    "l1": DistanceMethod.MANHATTAN,
    "euclidean": DistanceMethod.EUCLIDEAN,
    "euclid": DistanceMethod.EUCLIDEAN,
    "l2": DistanceMethod.EUCLIDEAN,
    "chi": DistanceMethod.CHI,
    "chi2": DistanceMethod.CHI,
    "chisq": DistanceMethod.CHI,
    "chi_squared": DistanceMethod.CHI,
    "chi_square": DistanceMethod.CHI,
    "hellinger": DistanceMethod.HELLINGER,
}


class OutputFormat(Enum):
    """Shape of the value returned by a psi workflow."""

    LIST = "list"
    TABLE = "table"
    MATRIX = "matrix"

    @classmethod
    def parse(cls, output: "OutputFormat | str | None") -> "OutputFormat":
        """Resolve an output name. ``None`` or an empty string means ``LIST``."""
        if isinstance(output, cls):
            return output
        if output is None or (isinstance(output, str) and not output.strip()):
            return cls.LIST
        resolved = _OUTPUT_ALIASES.get(_normalize_name(str(output)))
        if resolved is None:
            raise ValueError(
                f"Unknown output format: {output!r}. "
                f"Must be one of {[f.value for f in cls]}"
            )
        return resolved


_OUTPUT_ALIASES: Dict[str, OutputFormat] = {
    "list": OutputFormat.LIST,
    "dict": OutputFormat.LIST,
    "table": OutputFormat.TABLE,
    "dataframe": OutputFormat.TABLE,
    "data_frame": OutputFormat.TABLE,
    "df": OutputFormat.TABLE,
    "long": OutputFormat.TABLE,
    "matrix": OutputFormat.MATRIX,
    "square": OutputFormat.MATRIX,
}


@dataclass
class PsiConfig:
    """Engine options for a psi run."""
    method: DistanceMethod | str = DistanceMethod.MANHATTAN
    diagonal: bool = False
    output: OutputFormat | str = OutputFormat.TABLE
    parallel: bool = True
    n_jobs: Optional[int] = None
    strict: bool = True
    ragged_ratio: Optional[float] = 2.0

    def __post_init__(self):
        """Validate and normalize the engine options."""
        self.method = DistanceMethod.parse(self.method)
        self.output = OutputFormat.parse(self.output)
        if self.n_jobs is not None and self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero (use -1 or None for all cores)")
        if self.ragged_ratio is not None and self.ragged_ratio < 1:
            raise ValueError(f"ragged_ratio must be >= 1, got {self.ragged_ratio}")


@dataclass
class DatasetConfig:
    """Prepared sequences table."""
    path: str
    group_col: str
    time_col: Optional[str] = None
    exclude_columns: List[str] = field(default_factory=list)
    sep: str = ","

    def __post_init__(self):
        if not self.path:
            raise ValueError("Dataset path is required")
        if not self.group_col:
            raise ValueError("Dataset group_col is required")


@dataclass
class OutputConfig:
    """Where and how results are written."""
    path: Optional[str] = None
    format: str = "csv"

    def __post_init__(self):
        valid_format = {"csv", "json"}
        if self.format not in valid_format:
            raise ValueError(f"format must be one of {valid_format}, got {self.format}")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"

    def __post_init__(self):
        valid_level = {"DEBUG", "INFO", "WARNING", "ERROR"}
        self.level = self.level.upper()
        if self.level not in valid_level:
            raise ValueError(f"level must be one of {valid_level}, got {self.level}")


@dataclass
class PipelineConfig:
    """Complete configuration of a file-driven psi run."""
    dataset: DatasetConfig
    psi: PsiConfig = field(default_factory=PsiConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PipelineConfig:
        """Create PipelineConfig from dictionary (e.g., from YAML)."""
        return cls(
            dataset=DatasetConfig(**data['dataset']),
            psi=PsiConfig(**(data.get('psi') or {})),
            output=OutputConfig(**(data.get('output') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> PipelineConfig:
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or 'dataset' not in data:
            raise ValueError("Missing required section: dataset")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary (enums as their names)."""
        data = asdict(self)
        data['psi']['method'] = self.psi.method.value
        data['psi']['output'] = self.psi.output.value
        return data
