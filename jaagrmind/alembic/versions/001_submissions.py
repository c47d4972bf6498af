"""Submissions table

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

The schools, students and assessments tables are owned by the
administration service; only the submissions table is created here.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'submissions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('student_id', sa.String(64), nullable=False),
        sa.Column('school_id', sa.String(64), nullable=False),
        sa.Column('assessment_id', sa.String(64), nullable=False),
        sa.Column('total_score', sa.Integer(), nullable=False),
        sa.Column('section_scores', postgresql.JSONB(), nullable=False),
        sa.Column('section_buckets', postgresql.JSONB(), nullable=False),
        sa.Column('primary_skill_area', sa.String(1), nullable=True),
        sa.Column('secondary_skill_area', sa.String(1), nullable=True),
        sa.Column('assigned_bucket', sa.String(32), nullable=False),
        sa.Column('answers', postgresql.JSONB(), nullable=False),
        sa.Column('time_taken', sa.Float(), nullable=False, server_default='0'),
        sa.Column('mobile_number', sa.String(32), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.UniqueConstraint('student_id', 'assessment_id', name='uq_submissions_student_assessment'),
    )

    op.create_index(
        'idx_submissions_school_submitted', 'submissions',
        ['school_id', sa.text('submitted_at DESC')]
    )
    op.create_index('idx_submissions_assessment', 'submissions', ['assessment_id'])
    op.create_index('idx_submissions_bucket', 'submissions', ['assigned_bucket'])


def downgrade():
    op.drop_index('idx_submissions_bucket', table_name='submissions')
    op.drop_index('idx_submissions_assessment', table_name='submissions')
    op.drop_index('idx_submissions_school_submitted', table_name='submissions')
    op.drop_table('submissions')
