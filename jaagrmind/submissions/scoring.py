"""
Scoring Engine

Recomputes every mark from the catalog. Whatever score a client reports
never reaches this module; validated answers carry only the selected option.
"""

from typing import Dict, Sequence

from jaagrmind.catalog.model import Catalog, Section
from jaagrmind.submissions.models import Answer, ScoredAnswers, ValidatedAnswer


def score(catalog: Catalog, validated: Sequence[ValidatedAnswer]) -> ScoredAnswers:
    """
    Score validated answers.

    Args:
        catalog: The catalog the answers were validated against
        validated: Output of ``validate`` for the same catalog

    Returns:
        Scored answers with total and per-section scores
    """
    section_scores: Dict[Section, int] = {section: 0 for section in Section}
    section_counts: Dict[Section, int] = {section: 0 for section in Section}
    answers = []

    for item in validated:
        question = catalog.question(item.question_index)
        mark = question.mark_for(item.selected_option)
        answers.append(Answer(
            question_index=item.question_index,
            section=question.section,
            selected_option=item.selected_option,
            mark=mark,
            time_taken=item.time_taken,
        ))
        section_scores[question.section] += mark
        section_counts[question.section] += 1

    return ScoredAnswers(
        answers=tuple(answers),
        total_score=sum(answer.mark for answer in answers),
        section_scores=section_scores,
        section_counts=section_counts,
    )
