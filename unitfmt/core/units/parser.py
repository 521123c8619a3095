"""
Compound Unit Parser

Resolves unit expressions such as ``'m^3/(kg s^2)'``, ``'10^24 kg'`` or
``'d^-1'`` into a multiplier relative to internal units, using only the
linear entries of a registry.

The evaluation works directly on the string.  At every level the checks run
in a fixed order:

1. a parenthesized group spanning the whole string is unwrapped
2. the first top-level space splits into a product
3. the first top-level ``/`` splits into a quotient
4. the first top-level ``^`` splits into a power
5. otherwise the string is a registry symbol or a decimal literal

Only operators at parenthesis depth 0 are split points, and each call splits
once, so space binds loosest and ``^`` tightest.
"""

import math
import re
from typing import Dict, Optional

from ..exceptions import (
    EmptySubexpressionError,
    UnmatchedParenthesisError,
    UnresolvableUnitError,
)
from .registry import UnitRegistry, get_default_registry

# Checked in this order at every recursion level
_OPERATORS = (' ', '/', '^')

# Plain decimal literal with optional sign and exponent
_NUMBER = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)


def parse_compound_unit(unit_str: str, registry: UnitRegistry = None,
                        fail_loud: bool = True) -> float:
    """
    Resolve a compound unit expression to its multiplier

    Args:
        unit_str: Unit expression (e.g., 'km/s', 'm^3/(kg s^2)')
        registry: Registry supplying atomic multipliers (default registry if None)
        fail_loud: Raise on failure if True, return NaN otherwise

    Returns:
        Multiplier converting the unit to internal units, or NaN in quiet mode

    Raises:
        UnresolvableUnitError: If the expression cannot be resolved (loud mode)
    """
    if registry is None:
        registry = get_default_registry()

    try:
        return evaluate_unit_expression(unit_str, registry)
    except UnresolvableUnitError:
        if fail_loud:
            raise
        return math.nan


def evaluate_unit_expression(unit_str: str, registry: UnitRegistry) -> float:
    """
    Resolve a compound unit expression, raising on any failure

    The registry is only read; callers decide whether to memoize the result.
    """
    try:
        multiplier = _evaluate(unit_str, registry, unit_str)
    except RecursionError:
        raise UnresolvableUnitError(unit_str, unit_str, "Unit expression is nested too deeply") from None

    if multiplier == 0:
        raise UnresolvableUnitError(unit_str, unit_str, f"Unit '{unit_str}' resolves to a zero multiplier")

    return multiplier


# ===================================================================
# RECURSIVE EVALUATION
# ===================================================================

def _evaluate(expr: str, registry: UnitRegistry, expression: str) -> float:
    if not expr:
        raise EmptySubexpressionError(expression)

    if expr[0] == '(' and _group_end(expr) == len(expr) - 1:
        return _evaluate(expr[1:-1], registry, expression)

    split_points = _find_split_points(expr, expression)
    for operator in _OPERATORS:
        index = split_points.get(operator)
        if index is None:
            continue
        left = _evaluate(expr[:index], registry, expression)
        right = _evaluate(expr[index + 1:], registry, expression)
        return _apply(operator, left, right, expr, expression)

    return _resolve_leaf(expr, registry, expression)


def _group_end(expr: str) -> Optional[int]:
    """Index of the parenthesis closing the one at index 0, None if it never closes"""
    depth = 0
    for index, char in enumerate(expr):
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return index
    return None


def _find_split_points(expr: str, expression: str) -> Dict[str, int]:
    """
    Single depth-tracking scan for the first top-level occurrence of each operator

    Raises:
        UnmatchedParenthesisError: If a ')' has no opening partner or a '('
            is never closed
    """
    depth = 0
    split_points = {}

    for index, char in enumerate(expr):
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth < 0:
                raise UnmatchedParenthesisError(expr, expression)
        elif depth == 0 and char in _OPERATORS and char not in split_points:
            split_points[char] = index

    if depth > 0:
        raise UnmatchedParenthesisError(expr, expression)

    return split_points


def _apply(operator: str, left: float, right: float, expr: str, expression: str) -> float:
    try:
        if operator == ' ':
            result = left * right
        elif operator == '/':
            result = left / right
        else:
            # math.pow raises instead of returning complex for negative bases
            result = math.pow(left, right)
    except (ZeroDivisionError, OverflowError, ValueError):
        raise UnresolvableUnitError(expr, expression, f"Cannot evaluate '{expr}'") from None

    if not math.isfinite(result):
        raise UnresolvableUnitError(expr, expression, f"'{expr}' evaluates to {result}")

    return result


def _resolve_leaf(expr: str, registry: UnitRegistry, expression: str) -> float:
    multiplier = registry.lookup_linear(expr)
    if multiplier is not None:
        return multiplier

    if not _NUMBER.fullmatch(expr):
        if registry.lookup_nonlinear(expr) is not None:
            raise UnresolvableUnitError(
                expr, expression, f"Nonlinear unit '{expr}' cannot be part of a compound unit")
        raise UnresolvableUnitError(expr, expression)

    value = float(expr)
    if not math.isfinite(value):
        raise UnresolvableUnitError(expr, expression)

    return value
