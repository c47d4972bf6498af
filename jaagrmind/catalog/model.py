"""
Question Catalog Domain Model Module

This module defines the read-only view of an assessment's questions that
the scoring pipeline treats as ground truth for mark weights.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


class Section(enum.Enum):
    """
    The four sections partitioning an assessment's questions.

    Declaration order is the fixed section order used to break ties.
    """
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def order(self) -> int:
        return _SECTION_ORDER[self]


_SECTION_ORDER = {section: position for position, section in enumerate(Section)}


@dataclass(frozen=True)
class QuestionOption:
    """An answer option and the marks it is worth."""
    text: str
    mark_weight: int

    def __post_init__(self):
        if isinstance(self.mark_weight, bool) or not isinstance(self.mark_weight, int):
            raise ValueError(f"Mark weight must be an integer, got {self.mark_weight!r}")
        if self.mark_weight < 0:
            raise ValueError(f"Mark weight must be non-negative, got {self.mark_weight}")


@dataclass(frozen=True)
class Question:
    """
    A catalog question.

    Attributes:
        index: Position of the question in the assessment, starting at 0
        section: The section the question belongs to
        options: Ordered answer options with their mark weights
        text: The question text
    """
    index: int
    section: Section
    options: Tuple[QuestionOption, ...]
    text: str = ""

    @property
    def option_count(self) -> int:
        return len(self.options)

    @property
    def max_mark(self) -> int:
        """Highest mark attainable on this question."""
        return max((option.mark_weight for option in self.options), default=0)

    def mark_for(self, selected_option: int) -> int:
        """Catalog mark weight of the selected option."""
        return self.options[selected_option].mark_weight

    @classmethod
    def from_dict(cls, index: int, data: Dict[str, Any]) -> 'Question':
        """
        Build a question from its stored JSON form.

        Option weights are read from ``marks`` (the stored form) or
        ``markWeight``.

        Args:
            index: Position of the question in the assessment
            data: Dictionary with ``section``, ``text`` and ``options``

        Returns:
            A Question instance
        """
        options = []
        for option in data.get("options", []):
            weight = option.get("marks", option.get("markWeight", 0))
            options.append(QuestionOption(text=option.get("text", ""), mark_weight=weight))
        return cls(
            index=index,
            section=Section(data.get("section")),
            options=tuple(options),
            text=data.get("text", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "section": self.section.value,
            "text": self.text,
            "options": [{"text": o.text, "marks": o.mark_weight} for o in self.options],
        }


@dataclass(frozen=True)
class Catalog:
    """
    The ordered, immutable question list of one assessment version.

    Question ``i`` always carries index ``i``; this is checked on
    construction so answers can be aligned to the catalog by position.
    """
    assessment_id: str
    questions: Tuple[Question, ...]
    title: str = ""
    _section_maxima: Dict[Section, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        for position, question in enumerate(self.questions):
            if question.index != position:
                raise ValueError(
                    f"Catalog {self.assessment_id} question at position {position} has index {question.index}"
                )
        maxima: Dict[Section, int] = {}
        for question in self.questions:
            maxima[question.section] = maxima.get(question.section, 0) + question.max_mark
        object.__setattr__(self, "_section_maxima", maxima)

    def __len__(self) -> int:
        return len(self.questions)

    def question(self, index: int) -> Question:
        return self.questions[index]

    @property
    def section_maxima(self) -> Dict[Section, int]:
        """Maximum attainable score per section, only for sections with questions."""
        return dict(self._section_maxima)

    @property
    def max_score(self) -> int:
        return sum(self._section_maxima.values())

    def section_of(self, index: int) -> Optional[Section]:
        if 0 <= index < len(self.questions):
            return self.questions[index].section
        return None

    @classmethod
    def from_records(cls, assessment_id: str, questions: List[Dict[str, Any]], title: str = "") -> 'Catalog':
        """Build a catalog from the stored question list."""
        return cls(
            assessment_id=assessment_id,
            questions=tuple(Question.from_dict(i, q) for i, q in enumerate(questions)),
            title=title,
        )
