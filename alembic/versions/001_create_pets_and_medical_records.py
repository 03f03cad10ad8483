"""Create pets and medical_records tables

Revision ID: 001
Revises:
Create Date: 2026-10-16 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create pets table
    op.create_table('pets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('animal_type', sa.String(length=100), nullable=False),
        sa.Column('owner_name', sa.String(length=255), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_pets_animal_type', 'pets', ['animal_type'])
    op.create_index('idx_pets_name', 'pets', ['name'])

    # Create medical_records table
    op.create_table('medical_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('pet_id', sa.Integer(), nullable=False),
        sa.Column('record_type', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('reactions', sa.Text(), nullable=True),
        sa.Column('severity', sa.String(length=20), nullable=True),
        sa.CheckConstraint("record_type IN ('vaccine', 'allergy')", name='ck_medical_records_record_type'),
        sa.CheckConstraint("severity IS NULL OR severity IN ('mild', 'severe')", name='ck_medical_records_severity'),
        sa.ForeignKeyConstraint(['pet_id'], ['pets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_medical_records_pet_id', 'medical_records', ['pet_id'])
    op.create_index('idx_medical_records_type', 'medical_records', ['record_type'])


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_index('idx_medical_records_type', table_name='medical_records')
    op.drop_index('idx_medical_records_pet_id', table_name='medical_records')
    op.drop_table('medical_records')

    op.drop_index('idx_pets_name', table_name='pets')
    op.drop_index('idx_pets_animal_type', table_name='pets')
    op.drop_table('pets')
