"""
Domain filters.

A domain is a list of clauses joined with OR; a clause is a list of
conditions joined with AND; a condition is ``[field, operator, value]``.
Shorter forms (a single condition, a single clause) are accepted and
normalized.
"""

import operator
import re
from typing import Any, Iterable, List, Mapping

from app.exceptions import ServiceValidationError


def _like(value: Any, pattern: Any, flags: int = 0) -> bool:
    if value is None or pattern is None:
        return False
    regex = "".join(
        ".*" if c == "%" else "." if c == "_" else re.escape(c) for c in str(pattern)
    )
    return re.fullmatch(regex, str(value), flags | re.DOTALL) is not None


def _is(value: Any, expected: Any) -> bool:
    if expected in (None, "null"):
        return value is None
    if expected in (True, "true"):
        return value is True or value == 1
    if expected in (False, "false"):
        return value is False or value == 0
    return value == expected


def _in(value: Any, candidates: Any) -> bool:
    if not isinstance(candidates, (list, tuple, set)):
        candidates = [candidates]
    return value in candidates


def _compare(op):
    def apply(value, expected):
        if value is None or expected is None:
            return False
        try:
            return op(value, expected)
        except TypeError:
            return op(str(value), str(expected))

    return apply


OPERATORS = {
    "=": lambda v, e: v == e,
    "<>": lambda v, e: v != e,
    "<": _compare(operator.lt),
    "<=": _compare(operator.le),
    ">": _compare(operator.gt),
    ">=": _compare(operator.ge),
    "in": _in,
    "not in": lambda v, e: not _in(v, e),
    "like": _like,
    "ilike": lambda v, e: _like(v, e, re.IGNORECASE),
    "is": _is,
}


def _is_condition(item: Any) -> bool:
    return (
        isinstance(item, (list, tuple))
        and len(item) == 3
        and isinstance(item[0], str)
        and isinstance(item[1], str)
    )


class Domain:
    """Filter evaluated against plain records (mappings)"""

    def __init__(self, domain: Iterable = ()):
        if domain is None:
            domain = ()
        if not isinstance(domain, (list, tuple)):
            raise ServiceValidationError(f"Malformed domain: {domain!r}", code="invalid_param")
        self.clauses = self.normalize(list(domain))

    @staticmethod
    def normalize(domain: list) -> List[list]:
        if not domain:
            return []
        if _is_condition(domain):
            clauses = [[list(domain)]]
        elif all(_is_condition(c) for c in domain):
            clauses = [[list(c) for c in domain]]
        else:
            clauses = []
            for clause in domain:
                if not isinstance(clause, (list, tuple)) or not all(_is_condition(c) for c in clause):
                    raise ServiceValidationError(f"Malformed domain clause: {clause!r}")
                clauses.append([list(c) for c in clause])
        for clause in clauses:
            for field, op, _ in clause:
                if op not in OPERATORS:
                    raise ServiceValidationError(f"Unknown domain operator '{op}' on field '{field}'")
        return clauses

    def evaluate(self, record: Mapping[str, Any]) -> bool:
        if not self.clauses:
            return True
        return any(self._evaluate_clause(clause, record) for clause in self.clauses)

    @staticmethod
    def _evaluate_clause(clause: List[list], record: Mapping[str, Any]) -> bool:
        for field, op, value in clause:
            if field not in record:
                return False
            if not OPERATORS[op](record[field], value):
                return False
        return True
