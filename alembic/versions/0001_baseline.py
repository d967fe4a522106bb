"""Baseline migration - geography, lookups, organizations, quests, rewards, tickets

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-18

Every entity table carries record_status/created_at/updated_at. Names that
must be unique are enforced by partial indexes over non-deleted rows so a
deleted name can be reused.
"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RECORD_COLUMNS = '''
            record_status VARCHAR(20) NOT NULL DEFAULT 'CREATED',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
'''

LIVE = "WHERE record_status <> 'DELETED'"


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Geography
    # ==========================================================================
    op.execute(f'''
        CREATE TABLE regions (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute(f'CREATE UNIQUE INDEX uq_regions_name_live ON regions (name) {LIVE}')

    op.execute(f'''
        CREATE TABLE cities (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            latitude VARCHAR(32),
            longitude VARCHAR(32),
            region_id INTEGER NOT NULL REFERENCES regions(id),
            {RECORD_COLUMNS}
        )
    ''')
    op.execute('CREATE INDEX idx_cities_region ON cities (region_id)')

    # ==========================================================================
    # Lookups
    # ==========================================================================
    for table in ('categories', 'help_types', 'organization_types'):
        op.execute(f'''
            CREATE TABLE {table} (
                id SERIAL PRIMARY KEY,
                name VARCHAR(255) NOT NULL,
                {RECORD_COLUMNS}
            )
        ''')
        op.execute(f'CREATE UNIQUE INDEX uq_{table}_name_live ON {table} (name) {LIVE}')

    # ==========================================================================
    # Organizations and users
    # ==========================================================================
    op.execute(f'''
        CREATE TABLE organizations (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL,
            city_id INTEGER NOT NULL REFERENCES cities(id),
            organization_type_id INTEGER NOT NULL REFERENCES organization_types(id),
            latitude VARCHAR(32),
            longitude VARCHAR(32),
            summary TEXT,
            mission TEXT,
            description TEXT,
            goals JSONB,
            needs JSONB,
            address TEXT,
            contacts JSONB,
            gallery JSONB,
            is_approved BOOLEAN NOT NULL DEFAULT false,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute('CREATE INDEX idx_organizations_city ON organizations (city_id)')
    op.execute('CREATE INDEX idx_organizations_approved ON organizations (is_approved)')

    op.execute(f'''
        CREATE TABLE users (
            id SERIAL PRIMARY KEY,
            first_name VARCHAR(255) NOT NULL,
            last_name VARCHAR(255) NOT NULL,
            middle_name VARCHAR(255),
            email VARCHAR(255) NOT NULL,
            password_hash VARCHAR(255) NOT NULL,
            avatar_urls JSONB,
            role VARCHAR(20) NOT NULL DEFAULT 'USER',
            level INTEGER NOT NULL DEFAULT 1,
            experience INTEGER NOT NULL DEFAULT 0,
            organisation_id INTEGER REFERENCES organizations(id),
            {RECORD_COLUMNS}
        )
    ''')
    op.execute(f'CREATE UNIQUE INDEX uq_users_email_live ON users (email) {LIVE}')

    op.execute('''
        CREATE TABLE organization_owners (
            id SERIAL PRIMARY KEY,
            organization_id INTEGER NOT NULL REFERENCES organizations(id) ON DELETE CASCADE,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT uq_organization_owner UNIQUE (organization_id, user_id)
        )
    ''')

    op.execute('''
        CREATE TABLE organization_help_types (
            id SERIAL PRIMARY KEY,
            organization_id INTEGER NOT NULL REFERENCES organizations(id) ON DELETE CASCADE,
            help_type_id INTEGER NOT NULL REFERENCES help_types(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT uq_organization_help_type UNIQUE (organization_id, help_type_id)
        )
    ''')

    op.execute(f'''
        CREATE TABLE organization_updates (
            id SERIAL PRIMARY KEY,
            organization_id INTEGER NOT NULL REFERENCES organizations(id),
            title VARCHAR(255) NOT NULL,
            text TEXT NOT NULL,
            photos JSONB,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute('CREATE INDEX idx_organization_updates_org ON organization_updates (organization_id)')

    # ==========================================================================
    # Achievements and quests
    # ==========================================================================
    op.execute(f'''
        CREATE TABLE achievements (
            id SERIAL PRIMARY KEY,
            title VARCHAR(255) NOT NULL,
            description TEXT,
            icon TEXT,
            rarity VARCHAR(20) NOT NULL,
            quest_id INTEGER,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute(f'CREATE UNIQUE INDEX uq_achievements_title_live ON achievements (title) {LIVE}')

    op.execute(f'''
        CREATE TABLE quests (
            id SERIAL PRIMARY KEY,
            title VARCHAR(255) NOT NULL,
            description TEXT,
            status VARCHAR(20) NOT NULL DEFAULT 'active',
            experience_reward INTEGER NOT NULL DEFAULT 0,
            achievement_id INTEGER REFERENCES achievements(id),
            owner_id INTEGER NOT NULL REFERENCES users(id),
            city_id INTEGER NOT NULL REFERENCES cities(id),
            organization_type_id INTEGER REFERENCES organization_types(id),
            latitude VARCHAR(32),
            longitude VARCHAR(32),
            address TEXT,
            contacts JSONB,
            cover_image TEXT,
            gallery JSONB,
            steps JSONB,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute('CREATE INDEX idx_quests_city ON quests (city_id)')
    op.execute('CREATE INDEX idx_quests_status ON quests (status)')

    op.execute('''
        CREATE TABLE quest_categories (
            id SERIAL PRIMARY KEY,
            quest_id INTEGER NOT NULL REFERENCES quests(id) ON DELETE CASCADE,
            category_id INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
            CONSTRAINT uq_quest_category UNIQUE (quest_id, category_id)
        )
    ''')

    op.execute('''
        CREATE TABLE user_quests (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            quest_id INTEGER NOT NULL REFERENCES quests(id) ON DELETE CASCADE,
            status VARCHAR(20) NOT NULL DEFAULT 'in_progress',
            started_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            completed_at TIMESTAMPTZ,
            CONSTRAINT uq_user_quest UNIQUE (user_id, quest_id)
        )
    ''')

    op.execute(f'''
        CREATE TABLE quest_updates (
            id SERIAL PRIMARY KEY,
            quest_id INTEGER NOT NULL REFERENCES quests(id),
            title VARCHAR(255) NOT NULL,
            text TEXT NOT NULL,
            photos JSONB,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute('CREATE INDEX idx_quest_updates_quest ON quest_updates (quest_id)')

    op.execute('''
        CREATE TABLE user_achievements (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            achievement_id INTEGER NOT NULL REFERENCES achievements(id) ON DELETE CASCADE,
            received_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            CONSTRAINT uq_user_achievement UNIQUE (user_id, achievement_id)
        )
    ''')

    # ==========================================================================
    # Support tickets
    # ==========================================================================
    op.execute(f'''
        CREATE TABLE tickets (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id),
            chat_id VARCHAR(255) NOT NULL,
            is_resolved BOOLEAN NOT NULL DEFAULT false,
            {RECORD_COLUMNS}
        )
    ''')
    op.execute('CREATE INDEX idx_tickets_user ON tickets (user_id)')


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        'tickets',
        'user_achievements',
        'quest_updates',
        'user_quests',
        'quest_categories',
        'quests',
        'achievements',
        'organization_updates',
        'organization_help_types',
        'organization_owners',
        'users',
        'organizations',
        'organization_types',
        'help_types',
        'categories',
        'cities',
        'regions',
    ):
        op.execute(f'DROP TABLE IF EXISTS {table}')
