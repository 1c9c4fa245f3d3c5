"""
Source-location resolution for rendered React elements.

Modules:
- model: SourceLocation, resolution outcomes, traversal budgets
- graph: HostGraph interface over page objects
- memory: in-process graph and JSON snapshots
- remote: CDP remote-object graph
- handles: internal-handle locator
- debug_source: debug-source extractor
- registry: devtools-hook registry fallback
- normalize: path canonicalization and display paths
- resolver: the orchestrator
"""

from .debug_source import component_name, extract
from .graph import HostError, HostGraph
from .handles import HANDLE_STRATEGIES, HandleStrategy, locate, locate_handle
from .model import (
    MAX_ANCESTOR_HOPS,
    MAX_COMPONENT_NAME_DEPTH,
    MAX_DEBUG_SOURCE_DEPTH,
    Found,
    NoDebugSourceFound,
    NoHandleFound,
    ResolutionOutcome,
    SourceLocation,
)
from .normalize import display_path, normalize, strip_bundler_prefix
from .registry import fallback_locate
from .resolver import Resolver, resolve

__all__ = [
    "HANDLE_STRATEGIES",
    "MAX_ANCESTOR_HOPS",
    "MAX_COMPONENT_NAME_DEPTH",
    "MAX_DEBUG_SOURCE_DEPTH",
    "Found",
    "HandleStrategy",
    "HostError",
    "HostGraph",
    "NoDebugSourceFound",
    "NoHandleFound",
    "ResolutionOutcome",
    "Resolver",
    "SourceLocation",
    "component_name",
    "display_path",
    "extract",
    "fallback_locate",
    "locate",
    "locate_handle",
    "normalize",
    "resolve",
    "strip_bundler_prefix",
]
