"""Replace common LaTeX commands with Unicode glyphs for raw-text display."""

from __future__ import annotations

from typing import Tuple

__all__ = ["SYMBOL_TABLE", "normalize_symbols"]

# Applied in order; each rule runs over the whole string before the next one.
SYMBOL_TABLE: Tuple[Tuple[str, str], ...] = (
    ("\\gamma", "γ"),
    ("\\alpha", "α"),
    ("\\beta", "β"),
    ("\\delta", "δ"),
    ("\\theta", "θ"),
    ("\\sigma", "σ"),
    ("\\lambda", "λ"),
    ("\\pi", "π"),
    ("\\times", "×"),
    ("\\approx", "≈"),
    ("\\neq", "≠"),
    ("\\leq", "≤"),
    ("\\geq", "≥"),
    ("\\rightarrow", "→"),
    ("\\leftarrow", "←"),
    ("\\infty", "∞"),
    ("\\sum", "∑"),
    ("\\prod", "∏"),
    ("\\int", "∫"),
    ("^2", "²"),
    ("^3", "³"),
)


def normalize_symbols(text: str) -> str:
    """
    Literal substring replacement, not LaTeX-aware: ``\\lambdax`` becomes ``λx``.
    Only meant for logic-mode thought/result text.
    """
    for command, glyph in SYMBOL_TABLE:
        text = text.replace(command, glyph)
    return text
