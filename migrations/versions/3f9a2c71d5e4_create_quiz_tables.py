"""Create quiz tables

Revision ID: 3f9a2c71d5e4
Revises:
Create Date: 2026-10-19 09:12:44.201733

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '3f9a2c71d5e4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    # Create quizzes table
    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)

    # Create quiz_questions table
    if 'quiz_questions' not in tables:
        op.create_table('quiz_questions',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('quiz_id', sa.String(length=36), nullable=False),
            sa.Column('question_type', sa.String(length=20), nullable=False),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('options', sa.Text(), nullable=True),
            sa.Column('correct_answers', sa.Text(), nullable=True),
            sa.Column('required', sa.Boolean(), nullable=False, server_default='1'),
            sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quiz_questions_quiz_id', 'quiz_questions', ['quiz_id'], unique=False)
        op.create_index('ix_quiz_questions_question_type', 'quiz_questions', ['question_type'], unique=False)
        op.create_index('ix_quiz_questions_quiz_position', 'quiz_questions', ['quiz_id', 'position'], unique=False)


def downgrade():
    op.drop_index('ix_quiz_questions_quiz_position', table_name='quiz_questions')
    op.drop_index('ix_quiz_questions_question_type', table_name='quiz_questions')
    op.drop_index('ix_quiz_questions_quiz_id', table_name='quiz_questions')
    op.drop_table('quiz_questions')

    op.drop_index('ix_quizzes_created_at', table_name='quizzes')
    op.drop_table('quizzes')
