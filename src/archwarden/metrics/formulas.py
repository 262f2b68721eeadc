"""Pure metric formulas.

Instability follows Robert Martin: I = Ce / (Ca + Ce). The maintainability
index is the classic 171-based formula with a textual approximation of
Halstead volume and cyclomatic complexity:

    MI = 171 - 5.2 ln(V) - 0.23 CC - 16.2 ln(LOC)

clamped to 0..100.
"""

import math
import re

from .models import CouplingMetrics, InstabilityMetrics, MaintainabilityMetrics

_COMPLEXITY = re.compile(r"\b(?:if|else|for|while|switch|case|catch|&&|\|\||\?)")
_OPERATOR = re.compile(r"[+\-*/%=<>!&|^~]+")
_OPERAND = re.compile(r"\b[A-Za-z_][A-Za-z0-9_]*\b")

LONG_FILE_LINES = 300
HIGH_COMPLEXITY = 20

# (lower bound, grade, suggestions), checked top-down
_GRADES = (
    (80, "A (Excellent)", ()),
    (60, "B (Good)", ()),
    (40, "C (Moderate)", ("Consider breaking down large functions",)),
    (20, "D (Poor)", ("File needs refactoring", "Reduce cyclomatic complexity")),
    (
        float("-inf"),
        "F (Critical)",
        ("Urgent refactoring required", "Split into smaller modules", "Add documentation"),
    ),
)


def instability(afferent: int, efferent: int) -> InstabilityMetrics:
    total = afferent + efferent
    value = efferent / total if total > 0 else 0.0

    if value <= 0.2:
        classification = "Stable (Abstract)"
    elif value <= 0.5:
        classification = "Balanced"
    elif value <= 0.8:
        classification = "Flexible"
    else:
        classification = "Unstable (Concrete)"

    return InstabilityMetrics(
        instability=round(value, 3),
        classification=classification,
        afferent=afferent,
        efferent=efferent,
    )


def coupling(afferent: int, efferent: int) -> CouplingMetrics:
    total = afferent + efferent
    if total <= 5:
        quality = "Low Coupling (Good)"
    elif total <= 15:
        quality = "Moderate Coupling"
    elif total <= 25:
        quality = "High Coupling (Review)"
    else:
        quality = "Very High Coupling (Refactor)"
    return CouplingMetrics(afferent=afferent, efferent=efferent, total=total, quality=quality)


def maintainability_from_text(text: str) -> MaintainabilityMetrics:
    loc = len(text.split("\n"))
    complexity = len(_COMPLEXITY.findall(text))
    operators = len(_OPERATOR.findall(text))
    operands = len(_OPERAND.findall(text))

    volume = math.log(operators + operands + 1)
    mi = 171 - 5.2 * volume - 0.23 * complexity - 16.2 * math.log(loc + 1)
    mi = max(0.0, min(100.0, mi))

    for lower, grade, advice in _GRADES:
        if mi >= lower:
            suggestions = list(advice)
            break

    if loc > LONG_FILE_LINES:
        suggestions.append("File is too long, consider splitting")
    if complexity > HIGH_COMPLEXITY:
        suggestions.append("High cyclomatic complexity detected")

    return MaintainabilityMetrics(index=round(mi, 1), grade=grade, suggestions=tuple(suggestions))


def health_score(average_instability: float, average_maintainability: float) -> float:
    """Maintainability weighted 60%, stability 40%."""
    stability = (1 - average_instability) * 100
    return round(average_maintainability * 0.6 + stability * 0.4, 1)
