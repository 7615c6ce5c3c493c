# -*- coding: utf-8 -*-
"""Abstractions for the backing graph database."""
from typing import Any, ContextManager, Dict, List, Optional, Protocol

from zonegraph.utils.dataclasses import NodeSelector


class GraphSession(Protocol):
    """One scoped unit of work; every call is its own committed transaction."""

    def ensure_node(self, label: str, key: str, value: Any,
                    properties: Optional[Dict[str, Any]] = None) -> None: ...

    def ensure_edge(self, source: NodeSelector, rel_type: str,
                    target: NodeSelector) -> None: ...

    def read(self, query: str,
             parameters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]: ...


class GraphStore(Protocol):
    def session(self) -> ContextManager[GraphSession]: ...
