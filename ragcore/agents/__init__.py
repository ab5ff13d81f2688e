"""
Agents module.
"""
from .model_runner import ModelRunner, OllamaCLIRunner
from .expander import QueryExpander, parse_variations

__all__ = [
    "ModelRunner",
    "OllamaCLIRunner",
    "QueryExpander",
    "parse_variations",
]
