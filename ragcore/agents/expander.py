"""
Query Expander Agent - Rephrases a query into several search variations.
"""
from typing import List, Optional
import re

from ragcore.agents.model_runner import ModelRunner, OllamaCLIRunner
from ragcore.models import ExpanderConfig
from ragcore.utils.logger import get_logger

logger = get_logger(__name__)

# Lines where the model labelled or numbered a variation anyway
_NUMBERED_LINE = re.compile(r"^(variation|query|1|2|3|4|5)[:.)]", re.IGNORECASE)


def parse_variations(output: str) -> List[str]:
    """Split model output into candidate variations, one per line."""
    lines = (line.strip() for line in output.split("\n"))
    return [line for line in lines if line and not _NUMBERED_LINE.match(line)]


class QueryExpander:
    """Agent that expands a query into semantically similar variations."""

    def __init__(
        self,
        config: Optional[ExpanderConfig] = None,
        runner: Optional[ModelRunner] = None,
        debug: bool = False,
    ):
        """Initialize with a config and a model runner (Ollama CLI by default)."""
        self.config = config if config is not None else ExpanderConfig()
        self.runner = runner if runner is not None else OllamaCLIRunner(timeout=self.config.timeout)
        self.debug = debug

    @property
    def num_variations(self) -> int:
        return self.config.num_variations

    def build_prompt(self, query: str) -> str:
        return f"""Generate {self.num_variations} different variations of this query. Each variation should:
- Capture different phrasings or synonyms
- Focus on different aspects if the query is complex
- Be concise (1-2 sentences max)
- Be semantically similar but use different wording

Original query: "{query}"

Generate {self.num_variations} variations, one per line, without numbering or bullets:"""

    def expand_query(self, original_query: str) -> List[str]:
        """
        Expand a query into multiple variations.

        Args:
            original_query: The user's query

        Returns:
            ``num_variations`` strings starting with the original query, or
            just ``[original_query]`` if the model could not be run
        """
        if self.num_variations == 1:
            return [original_query]

        try:
            output = self.runner.run(self.build_prompt(original_query), self.config.model)
        except Exception as e:
            logger.warning(
                "Failed to expand query, using original",
                error=str(e),
                kind=getattr(e, "kind", "unknown"),
                suggestion=getattr(e, "suggestion", None),
            )
            return [original_query]

        variations = [original_query]
        variations.extend(parse_variations(output)[: self.num_variations - 1])
        while len(variations) < self.num_variations:
            variations.append(original_query)

        if self.debug:
            logger.debug("Expanded query", query=original_query, variations=variations)

        return variations[: self.num_variations]
