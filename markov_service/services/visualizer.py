"""
GraphViz (DOT) export for counting and probability tries.

Nodes are labelled with their token, edges with the child's weight: the raw
count for a counting trie, the probability (2 decimals) for a probability
trie. The trie is only read.
"""
from __future__ import annotations

import itertools
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from markov_service.services.counting_trie import CountNode
from markov_service.services.probability_trie import ProbNode
from markov_service.services.tokenizer import Token

Node = Union[CountNode, ProbNode]


def iter_children(node: Node) -> Iterator[Tuple[Token, Union[int, float], Node]]:
    """
    Enumerate ``(token, weight, child)`` for the direct children of a node.

    Args:
        node: CountNode or ProbNode
    """
    for token, child in node.children.items():
        if isinstance(child, CountNode):
            yield token, child.count, child
        else:
            yield token, child.probability, child


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _format_weight(weight: Union[int, float]) -> str:
    if isinstance(weight, int):
        return str(weight)
    return f"{weight:.2f}"


def to_dot(root: Node, root_label: str = "start", graph_name: str = "G") -> str:
    """
    Render a trie as a DOT digraph.

    Args:
        root: Root node of either trie
        root_label: Label of the root node
        graph_name: DOT graph name

    Returns:
        DOT source text
    """
    ids = itertools.count()
    lines: List[str] = [f"digraph {graph_name} {{"]

    def visit(node: Node, label: str) -> int:
        node_id = next(ids)
        lines.append(f'  {node_id} [label="{_escape(label)}"];')
        for token, weight, child in iter_children(node):
            child_id = visit(child, str(token))
            lines.append(f'  {node_id} -> {child_id} [label="{_format_weight(weight)}"];')
        return node_id

    visit(root, root_label)
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(root: Node, path: Union[str, Path], **kwargs) -> Path:
    """Write the DOT rendering of a trie to ``path``."""
    path = Path(path)
    path.write_text(to_dot(root, **kwargs), encoding="utf-8")
    return path
