"""Reusable blocking predicates.

Public API:
    MethodPolicy       : allow-list of HTTP methods (case-insensitive config)
    SchemePolicy       : allow-list of URL schemes (case-insensitive config)
    QueryPolicy        : query parameter → RE2 pattern, all must match
    InvalidPatternError: raised by QueryPolicy(strict=True) on a bad pattern

Every policy is a callable ``(Request) -> bool`` returning True to block, and
can be passed directly as ``ShieldConfig.block``.
"""
from shield.policies.method import MethodPolicy
from shield.policies.query import InvalidPatternError, QueryPolicy
from shield.policies.scheme import SchemePolicy

__all__ = ["InvalidPatternError", "MethodPolicy", "QueryPolicy", "SchemePolicy"]
