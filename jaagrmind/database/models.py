"""
Master-data table mappings.

Schools, students and assessments are created and edited by the
administration layer. The scoring core maps their tables only to read them:
the catalog repository loads assessment questions from ``assessments`` and
the analytics queries join ``students`` and ``schools`` to filter and label
submissions.
"""

import datetime

from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String

from jaagrmind.database.base import ModelBase


class SchoolRecord(ModelBase):
    """A school registered on the platform."""
    __tablename__ = "schools"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<SchoolRecord(id='{self.id}', name='{self.name}')>"


class StudentRecord(ModelBase):
    """A student, identified externally by their access id."""
    __tablename__ = "students"

    id = Column(String(64), primary_key=True)
    school_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    access_id = Column(String(64), nullable=False, unique=True)
    class_name = Column(String(32), nullable=True)
    section = Column(String(32), nullable=True)
    roll_no = Column(String(32), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_students_school_class", school_id, class_name, section),
    )

    def __repr__(self):
        return f"<StudentRecord(id='{self.id}', access_id='{self.access_id}')>"


class AssessmentRecord(ModelBase):
    """
    An assessment and its question catalog.

    ``questions`` holds the ordered question list as JSON:
    ``[{"section": "A", "text": "...", "options": [{"text": "...", "marks": 3}]}]``.
    """
    __tablename__ = "assessments"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False)
    questions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<AssessmentRecord(id='{self.id}', title='{self.title}')>"
