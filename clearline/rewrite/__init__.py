"""Rule-based rewrite pipeline for audit and compliance prose."""

from clearline.rewrite.engine import RewriteEngine, rewrite
from clearline.rewrite.records import Change, RewriteOptions, RewriteResult, StyleExample

__all__ = [
    "Change",
    "RewriteEngine",
    "RewriteOptions",
    "RewriteResult",
    "StyleExample",
    "rewrite",
]
