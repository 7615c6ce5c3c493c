# -*- coding: utf-8 -*-
"""
Retrieval package: the fixed zone traversal (ZoneQueryExecutor) and response
rendering (TemplateAnswerGenerator).
"""
from zonegraph.retrieval.query_executor import ZoneQueryExecutor
from zonegraph.retrieval.answer_generator import (
    AnswerGenerator,
    GeneratedAnswer,
    TemplateAnswerGenerator,
)

__all__ = [
    'ZoneQueryExecutor',
    'AnswerGenerator',
    'GeneratedAnswer',
    'TemplateAnswerGenerator',
]
