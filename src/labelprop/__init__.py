"""
labelprop - Connected components by synchronous min-label propagation

This package computes connected components of large undirected graphs using
only bulk set operations: a one-time symmetrization of the edge relation and a
repeated join plus grouped minimum over two generations of a label table. It
includes:

- The propagation kernel (symmetrizer, label store, step, convergence check)
- A bounded iteration driver with synchronous and asyncio entry points
- Partitioned parallel execution and memory budgets
- Edge document loading and a command line interface

For more information, please see the documentation.
"""

__version__ = "0.1.0"
__author__ = "labelprop Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("labelprop requires Python 3.10 or higher")

# Import commonly used components for easier access
from .core import (
    ComponentAnalysis,
    ComponentResult,
    Edge,
    PropagationConfig,
    TerminationReason,
    compute_connected_components,
    compute_connected_components_async,
)

__all__ = [
    "ComponentAnalysis",
    "ComponentResult",
    "Edge",
    "PropagationConfig",
    "TerminationReason",
    "compute_connected_components",
    "compute_connected_components_async",
]
