# -*- coding: utf-8 -*-
"""
Graphviz (DOT) rendering of the lexicon automaton and the language model.
Only useful for toy corpora; the output grows with every node.
"""

from typing import List

from ngramspell.lexicon import LexiconAutomaton, from_symbols
from ngramspell.model import SpellModel

_HEADER = "digraph finite_state_machine {\n  rankdir=LR;\n  size=\"8,5\";\n"


def _quote(text: str) -> str:
    return text.replace('"', '\\"')


def _node(name: str, label: str, final: bool) -> str:
    shape = "doublecircle" if final else "circle"
    return f'  node [shape = {shape}, label="{_quote(label)}", fontsize=12] "{_quote(name)}";'


def _edge(src: str, dst: str, label: str) -> str:
    return f'   "{_quote(src)}" -> "{_quote(dst)}" [ label = "{_quote(label)}" ];'


def draw_lexicon(lexicon: LexiconAutomaton) -> str:
    nodes: List[str] = []
    edges: List[str] = []
    stack = [((), lexicon.root)]
    while stack:
        prefix, node = stack.pop()
        name = f"T({from_symbols(prefix)})"
        extra = f"id: {node.word_id}" if node.accepting else ""
        nodes.append(_node(name, name + ("\\n" + extra if extra else ""), node.accepting))
        for symbol, child in node.children.items():
            child_prefix = prefix + (symbol,)
            edges.append(_edge(name, f"T({from_symbols(child_prefix)})", chr(symbol)))
            stack.append((child_prefix, child))
    return _HEADER + "\n".join(nodes) + "\n" + "\n".join(edges) + "\n}"


def draw_model(model: SpellModel) -> str:
    """DOT graph of the language model. Finalizes the model first."""
    model.finalize()
    lexicon = model.lexicon

    def state_name(ids):
        words = [lexicon.word_of(i) for i in ids]
        return "T(" + "|".join("?" if w is None else w for w in words) + ")"

    nodes: List[str] = []
    edges: List[str] = []
    for ids, node in model.backoff.contexts():
        name = state_name(ids)
        label = (f"{name}\\nCounts: {node.count}\\nProb: {node.log_prob}"
                 f"\\nnGram: {node.remaining}/{model.order}\\nFactor: {node.weight}")
        nodes.append(_node(name, label, bool(ids)))
        if ids:
            edges.append(_edge(state_name(ids[:-1]), name, str(ids[-1])))
    return _HEADER + "\n".join(nodes) + "\n" + "\n".join(edges) + "\n}"
