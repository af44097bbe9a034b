"""add stored_participant roster table

Revision ID: 5b7e2d91c0aa
Revises: 
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b7e2d91c0aa'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'stored_participant' in insp.get_table_names():
        return
    op.create_table(
        'stored_participant',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('picks', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('stored_participant') as batch_op:
        batch_op.create_index('ix_stored_participant_name', ['name'], unique=True)


def downgrade():
    with op.batch_alter_table('stored_participant') as batch_op:
        batch_op.drop_index('ix_stored_participant_name')
    op.drop_table('stored_participant')
