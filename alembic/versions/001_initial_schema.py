"""Initial schema with messages, threads, and message_embeddings

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create messages table
    op.create_table(
        'messages',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('channel_id', sa.String(length=32), nullable=False),
        sa.Column('ts', sa.String(length=32), nullable=False),
        sa.Column('user', sa.String(length=32), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('thread_ts', sa.String(length=32), nullable=True),
        sa.Column('ingested_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_messages_channel_id'), 'messages', ['channel_id'], unique=False)
    op.create_index('ix_messages_channel_ts', 'messages', ['channel_id', 'ts'], unique=False)

    # Create threads table (one row per reply)
    op.create_table(
        'threads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('message_id', sa.String(length=64), nullable=False),
        sa.Column('channel_id', sa.String(length=32), nullable=False),
        sa.Column('ts', sa.String(length=32), nullable=False),
        sa.Column('user', sa.String(length=32), nullable=True),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_threads_message_id'), 'threads', ['message_id'], unique=False)

    # Create message_embeddings table
    op.create_table(
        'message_embeddings',
        sa.Column('message_id', sa.String(length=64), nullable=False),
        sa.Column('namespace', sa.String(length=32), nullable=False),
        sa.Column('vector_id', sa.String(length=36), nullable=False),
        sa.Column('dimension', sa.Integer(), nullable=False),
        sa.Column('embedded_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('message_id'),
    )
    op.create_index(
        op.f('ix_message_embeddings_namespace'), 'message_embeddings', ['namespace'], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f('ix_message_embeddings_namespace'), table_name='message_embeddings')
    op.drop_table('message_embeddings')
    op.drop_index(op.f('ix_threads_message_id'), table_name='threads')
    op.drop_table('threads')
    op.drop_index('ix_messages_channel_ts', table_name='messages')
    op.drop_index(op.f('ix_messages_channel_id'), table_name='messages')
    op.drop_table('messages')
