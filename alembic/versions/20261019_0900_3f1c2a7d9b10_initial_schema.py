"""initial_schema

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1c2a7d9b10'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
            comment='Timestamp of record creation',
        ),
    ]
    if updated:
        columns.append(
            sa.Column(
                'updated_at',
                sa.DateTime(timezone=True),
                server_default=sa.text('CURRENT_TIMESTAMP'),
                nullable=False,
                comment='Timestamp of last update',
            ),
        )
    return columns


def upgrade() -> None:
    """Create outbox, inbox and every aggregate table."""
    # Transactional outbox, read by the external relay
    op.create_table(
        'domain_events_outbox',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('event_type', sa.String(length=100), nullable=False),
        sa.Column('payload', sa.Text(), nullable=False),
        sa.Column('aggregate_type', sa.String(length=50), nullable=False),
        sa.Column('aggregate_id', sa.String(length=100), nullable=False),
        sa.Column('correlation_id', sa.String(length=64), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_domain_events_outbox')),
    )
    op.create_index('ix_domain_events_outbox_created_at', 'domain_events_outbox', ['created_at'])
    op.create_index(
        'ix_domain_events_outbox_aggregate',
        'domain_events_outbox',
        ['aggregate_type', 'aggregate_id'],
    )

    # Inbox, one row per (event, consuming instance)
    op.create_table(
        'domain_events_inbox',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('instance', sa.String(length=100), nullable=False),
        sa.Column('event_type', sa.String(length=100), nullable=True),
        sa.Column('payload', sa.Text(), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', 'instance', name=op.f('pk_domain_events_inbox')),
    )

    op.create_table(
        'referees',
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v7 primary key (time-sortable)'),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('club', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_referees')),
    )
    op.create_index(op.f('ix_referees_club'), 'referees', ['club'])

    op.create_table(
        'teams',
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v7 primary key (time-sortable)'),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('club', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_teams')),
    )

    op.create_table(
        'venues',
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v7 primary key (time-sortable)'),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('street', sa.String(length=200), nullable=False),
        sa.Column('zip', sa.String(length=20), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('telephone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_venues')),
    )

    op.create_table(
        'fixtures',
        sa.Column('id', sa.Uuid(), nullable=False, comment='UUID v7 primary key (time-sortable)'),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('venue_id', sa.Uuid(), nullable=False),
        sa.Column('team_home_id', sa.Uuid(), nullable=False),
        sa.Column('team_away_id', sa.Uuid(), nullable=False),
        sa.Column('first_referee_id', sa.Uuid(), nullable=True),
        sa.Column('second_referee_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_fixtures')),
    )
    op.create_index(op.f('ix_fixtures_date'), 'fixtures', ['date'])
    op.create_index(op.f('ix_fixtures_team_home_id'), 'fixtures', ['team_home_id'])
    op.create_index(op.f('ix_fixtures_team_away_id'), 'fixtures', ['team_away_id'])
    op.create_index('ix_fixtures_venue_id_date', 'fixtures', ['venue_id', 'date'])

    op.create_table(
        'availabilities',
        sa.Column('fixture_id', sa.Uuid(), nullable=False),
        sa.Column('referee_id', sa.Uuid(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('fixture_id', 'referee_id', name=op.f('pk_availabilities')),
    )
    op.create_index(op.f('ix_availabilities_referee_id'), 'availabilities', ['referee_id'])

    op.create_table(
        'assignments',
        sa.Column('fixture_id', sa.Uuid(), nullable=False),
        sa.Column('referee_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('fixture_id', 'referee_id', name=op.f('pk_assignments')),
    )
    op.create_index(op.f('ix_assignments_referee_id'), 'assignments', ['referee_id'])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index(op.f('ix_assignments_referee_id'), table_name='assignments')
    op.drop_table('assignments')
    op.drop_index(op.f('ix_availabilities_referee_id'), table_name='availabilities')
    op.drop_table('availabilities')
    op.drop_index('ix_fixtures_venue_id_date', table_name='fixtures')
    op.drop_index(op.f('ix_fixtures_team_away_id'), table_name='fixtures')
    op.drop_index(op.f('ix_fixtures_team_home_id'), table_name='fixtures')
    op.drop_index(op.f('ix_fixtures_date'), table_name='fixtures')
    op.drop_table('fixtures')
    op.drop_table('venues')
    op.drop_table('teams')
    op.drop_index(op.f('ix_referees_club'), table_name='referees')
    op.drop_table('referees')
    op.drop_table('domain_events_inbox')
    op.drop_index('ix_domain_events_outbox_aggregate', table_name='domain_events_outbox')
    op.drop_index('ix_domain_events_outbox_created_at', table_name='domain_events_outbox')
    op.drop_table('domain_events_outbox')
