"""Directed graph primitives backing the role and resource hierarchies.

Components:
    - Digraph: dense integer-vertex directed graph (adjacency-list arena)
    - DigraphDFS: single-source reachability
    - DirectedCycle: depth-first cycle detection
    - SymbolGraph: string symbol <-> vertex mapping with child -> parent edges
"""

from __future__ import annotations

from .dfs import DigraphDFS
from .digraph import Digraph
from .directed_cycle import DirectedCycle
from .symbol_graph import SymbolGraph, SymbolGraphData

__all__ = [
    "Digraph",
    "DigraphDFS",
    "DirectedCycle",
    "SymbolGraph",
    "SymbolGraphData",
]
