# -*- coding: utf-8 -*-
"""
Answer generator for the zone graph pipeline.

Renders the question and the traversal records into one response string. The
template stands in for a text-generation collaborator; anything exposing the
same generate(question, records) method can replace it.
"""

# Standard library
import json
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Sequence

# Utils
from zonegraph.utils.logger import get_logger

logger = get_logger(__name__)


RESPONSE_TEMPLATE = "Question: {question}\nGraph Data: {graph_data}"


@dataclass
class GeneratedAnswer:
    """Rendered answer with the records it was built from."""
    answer: str
    query: str
    records_used: int


class AnswerGenerator(Protocol):
    def generate(self, question: str,
                 records: Sequence[Dict[str, Any]]) -> GeneratedAnswer: ...


class TemplateAnswerGenerator:
    """
    Question + JSON-serialized graph data, no model call.

    Records are serialized in the order given (the executor already sorts).
    """

    def __init__(self, template: str = RESPONSE_TEMPLATE):
        self.template = template

    def format_graph_data(self, records: Sequence[Dict[str, Any]]) -> str:
        """JSON array of the records; non-JSON values fall back to str()."""
        return json.dumps(list(records), ensure_ascii=False, default=str)

    def generate(self, question: str,
                 records: Sequence[Dict[str, Any]]) -> GeneratedAnswer:
        logger.info("Generating answer for query: %s", question)
        answer = self.template.format(
            question=question,
            graph_data=self.format_graph_data(records),
        )
        return GeneratedAnswer(answer=answer, query=question, records_used=len(records))
