from .aggregate import AggregationDiagnostics, aggregate
from .ownership import OwnershipIndex, build_index
from .patterns import MatchMode
from .version import __version__

__all__ = [
    "AggregationDiagnostics",
    "MatchMode",
    "OwnershipIndex",
    "__version__",
    "aggregate",
    "build_index",
]
