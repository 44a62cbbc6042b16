"""create sessions, prior art results and monitoring tables

Revision ID: 3b7e1d0c9a41
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3b7e1d0c9a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns():
    return [
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('patent_sessions',
    sa.Column('user_id', sa.String(), nullable=True),
    sa.Column('idea_prompt', sa.Text(), nullable=True),
    sa.Column('technical_analysis', sa.Text(), nullable=True),
    sa.Column('backend_analysis', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
    sa.Column('patent_type', sa.String(), nullable=True),
    *_audit_columns(),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_patent_sessions_user_id'), 'patent_sessions', ['user_id'], unique=False)

    op.create_table('ai_questions',
    sa.Column('session_id', sa.UUID(), nullable=False),
    sa.Column('question', sa.Text(), nullable=False),
    sa.Column('answer', sa.Text(), nullable=True),
    *_audit_columns(),
    sa.ForeignKeyConstraint(['session_id'], ['patent_sessions.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ai_questions_session_id'), 'ai_questions', ['session_id'], unique=False)

    op.create_table('prior_art_results',
    sa.Column('session_id', sa.UUID(), nullable=False),
    sa.Column('rank', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(), nullable=False),
    sa.Column('publication_number', sa.String(), nullable=True),
    sa.Column('summary', sa.Text(), nullable=True),
    sa.Column('url', sa.String(), nullable=True),
    sa.Column('patent_date', sa.String(), nullable=True),
    sa.Column('assignee', sa.String(), nullable=True),
    sa.Column('source', sa.String(), nullable=True),
    sa.Column('similarity_score', sa.Float(), nullable=False),
    sa.Column('semantic_score', sa.Float(), nullable=False),
    sa.Column('keyword_score', sa.Float(), nullable=False),
    sa.Column('overlap_claims', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
    sa.Column('difference_claims', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
    *_audit_columns(),
    sa.ForeignKeyConstraint(['session_id'], ['patent_sessions.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_prior_art_results_session_id'), 'prior_art_results', ['session_id'], unique=False)

    op.create_table('prior_art_monitors',
    sa.Column('session_id', sa.UUID(), nullable=False),
    sa.Column('search_query', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('results_found', sa.Integer(), nullable=False),
    sa.Column('highest_similarity_score', sa.Float(), nullable=True),
    sa.Column('last_search_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('next_search_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('monitoring_data', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
    *_audit_columns(),
    sa.ForeignKeyConstraint(['session_id'], ['patent_sessions.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_prior_art_monitors_session_id'), 'prior_art_monitors', ['session_id'], unique=True)

    op.create_table('infringement_alerts',
    sa.Column('session_id', sa.UUID(), nullable=False),
    sa.Column('alert_type', sa.String(), nullable=False),
    sa.Column('severity', sa.Enum('HIGH', 'CRITICAL', name='alertseverity'), nullable=False),
    sa.Column('title', sa.String(), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('confidence_score', sa.Float(), nullable=False),
    sa.Column('source_url', sa.String(), nullable=True),
    sa.Column('is_read', sa.Boolean(), nullable=False),
    sa.Column('metadata', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
    *_audit_columns(),
    sa.ForeignKeyConstraint(['session_id'], ['patent_sessions.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_infringement_alerts_session_id'), 'infringement_alerts', ['session_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_infringement_alerts_session_id'), table_name='infringement_alerts')
    op.drop_table('infringement_alerts')
    op.execute("DROP TYPE IF EXISTS alertseverity")
    op.drop_index(op.f('ix_prior_art_monitors_session_id'), table_name='prior_art_monitors')
    op.drop_table('prior_art_monitors')
    op.drop_index(op.f('ix_prior_art_results_session_id'), table_name='prior_art_results')
    op.drop_table('prior_art_results')
    op.drop_index(op.f('ix_ai_questions_session_id'), table_name='ai_questions')
    op.drop_table('ai_questions')
    op.drop_index(op.f('ix_patent_sessions_user_id'), table_name='patent_sessions')
    op.drop_table('patent_sessions')
