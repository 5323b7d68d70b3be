from .core.equiv import is_equivalent, equivalent
from .core.kinds import Kind, KindMismatchWarning, as_sequence, kind_of
from .analytics.equiv_matrix import EquivReport, compute_equivalence, equivalence_matrix
from .analytics.redundancy import drop_redundant_columns, redundancy_filter
from .analytics.dashboards import render_dashboard
from .utils.config_loader import EquivConfig, load_config

__all__ = [
    "is_equivalent",
    "equivalent",
    "Kind",
    "KindMismatchWarning",
    "as_sequence",
    "kind_of",
    "EquivReport",
    "compute_equivalence",
    "equivalence_matrix",
    "drop_redundant_columns",
    "redundancy_filter",
    "render_dashboard",
    "EquivConfig",
    "load_config",
]
