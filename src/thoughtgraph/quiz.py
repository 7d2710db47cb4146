"""Run a batch of goals against one graph, one independent execution per goal."""

from __future__ import annotations
import asyncio
from typing import Dict, List, Sequence

import structlog
from pydantic import BaseModel

from .errors import ThoughtGraphError
from .executor import GraphExecutor
from .ir import Graph

logger = structlog.get_logger(__name__)

QUIZZES: Dict[str, List[str]] = {
    "Simple Concepts": [
        "Explain the concept of black holes in simple terms.",
        "What is photosynthesis?",
        "Describe the water cycle briefly.",
    ],
    "Creative Writing": [
        "Write a short opening line for a fantasy novel.",
        "Describe a futuristic city in one sentence.",
        "Create a single line of dialogue for a wise old robot.",
    ],
}


class QuizResult(BaseModel):
    question: str
    answer: str
    ok: bool = True


async def _answer(executor: GraphExecutor, graph: Graph, question: str) -> QuizResult:
    try:
        answer = await executor.execute(graph, question)
    except ThoughtGraphError as e:
        logger.warning("quiz_question_failed", question=question, error=str(e))
        return QuizResult(question=question, answer=f"An error occurred: {e}", ok=False)
    return QuizResult(question=question, answer=answer)


async def run_quiz(executor: GraphExecutor, graph: Graph, questions: Sequence[str]) -> List[QuizResult]:
    """Answer every question concurrently; a failing question never sinks its siblings."""
    if not graph.nodes:
        return [QuizResult(question="Error", answer="Please select a configuration with nodes to test.", ok=False)]
    return list(await asyncio.gather(*(_answer(executor, graph, q) for q in questions)))
