"""initial tables

Revision ID: 0001
Revises: 
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

PRIORITIES = ('Prio 1', 'Prio 2', 'Prio 3', 'Prio 4')
TRADES = ('UX', 'UI', 'FE-DEV', 'BE-DEV', 'PM', 'TPM', 'COPY', 'CREATIVE', 'CONSULTANT', 'OTHER')
LEVELS = ('JUNIOR', 'MIDWEIGHT', 'SENIOR', 'DIRECTOR', 'C-LEVEL')

def _enum(values, name):
    # non-native: stored as VARCHAR on every backend, matching models.py
    return sa.Enum(*values, name=name, native_enum=False, length=20)

def upgrade():
    op.create_table('clients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('since', sa.String(length=50), nullable=False),
        sa.Column('priority', _enum(PRIORITIES, 'priority'), nullable=False),
    )

    op.create_table('people',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('trade', _enum(TRADES, 'trade'), nullable=False),
        sa.Column('level', _enum(LEVELS, 'level'), nullable=False),
    )
    op.create_index('ix_people_last_first', 'people', ['last_name', 'first_name'])

    op.create_table('projects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('budget_eur', sa.Float(), nullable=False),
    )
    op.create_index('ix_projects_client_id', 'projects', ['client_id'])

    op.create_table('challenges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
    )
    op.create_index('ix_challenges_project_id', 'challenges', ['project_id'])

    op.create_table('assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('challenge_id', sa.Integer(), sa.ForeignKey('challenges.id', ondelete='CASCADE'), nullable=False),
        sa.Column('person_id', sa.Integer(), sa.ForeignKey('people.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_owner', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_leader', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='100'),
        sa.UniqueConstraint('challenge_id', name='uq_assignments_challenge'),
        sa.CheckConstraint('quantity >= 0 AND quantity <= 100', name='ck_assignments_quantity_range'),
    )
    op.create_index('ix_assignments_project_id', 'assignments', ['project_id'])
    op.create_index('ix_assignments_person_id', 'assignments', ['person_id'])

def downgrade():
    op.drop_index('ix_assignments_person_id', table_name='assignments')
    op.drop_index('ix_assignments_project_id', table_name='assignments')
    op.drop_table('assignments')
    op.drop_index('ix_challenges_project_id', table_name='challenges')
    op.drop_table('challenges')
    op.drop_index('ix_projects_client_id', table_name='projects')
    op.drop_table('projects')
    op.drop_index('ix_people_last_first', table_name='people')
    op.drop_table('people')
    op.drop_table('clients')
