"""Initial schema: users, content, favorites and test sessions

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String, nullable=False),
        sa.Column('username', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'user_subscriptions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('expire_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default='true'),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_user_subscriptions_active_expire', 'user_subscriptions', ['is_active', 'expire_at'])

    op.create_table(
        'topics',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('difficulty', sa.String(50), nullable=False, server_default='medium'),
        sa.Column('duration', sa.SmallInteger, nullable=False, server_default='0'),
        sa.Column('subscription_required', sa.Boolean, nullable=False, server_default='false'),
    )

    op.create_table(
        'categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
    )

    op.create_table(
        'questions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('topic_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('topics.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('lang', sa.String(10), nullable=False),
        sa.Column('content', sa.Text, nullable=True),
        sa.Column('explanation', sa.Text, nullable=False, server_default=''),
    )
    op.create_index('ix_questions_topic_lang', 'questions', ['topic_id', 'lang'])

    op.create_table(
        'question_categories',
        sa.Column('question_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('questions.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('categories.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
    )
    op.create_index('ix_question_categories_category', 'question_categories', ['category_id'])

    op.create_table(
        'answers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('question_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('questions.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('value', sa.String(500), nullable=False),
        sa.Column('is_correct', sa.Boolean, nullable=False, server_default='false'),
    )
    op.create_index('ix_answers_question_id', 'answers', ['question_id'])

    op.create_table(
        'user_favorite_questions',
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('question_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('questions.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Test sessions
    op.execute("CREATE TYPE test_filter_type AS ENUM ('favorites', 'category', 'topic')")
    op.execute("CREATE TYPE test_status AS ENUM ('active', 'completed', 'abandoned')")

    op.create_table(
        'tests',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE', onupdate='CASCADE'), nullable=False),
        sa.Column('filter_type', sa.Enum('favorites', 'category', 'topic', name='test_filter_type', create_type=False), nullable=False),
        sa.Column('filter_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('lang', sa.String(10), nullable=False),
        sa.Column('filter_fingerprint', sa.String(100), nullable=False),
        sa.Column('total_questions', sa.SmallInteger, nullable=False),
        sa.Column('correct_count', sa.SmallInteger, nullable=False, server_default='0'),
        sa.Column('status', sa.Enum('active', 'completed', 'abandoned', name='test_status', create_type=False), nullable=False, server_default='active'),
        sa.Column('score_percent', sa.SmallInteger, nullable=True),
        sa.Column('is_deleted', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_tests_user_created', 'tests', ['user_id', 'created_at'])
    op.create_index('ix_tests_user_fingerprint_status', 'tests', ['user_id', 'filter_fingerprint', 'status'])
    op.create_index(
        'uq_tests_user_active_fingerprint',
        'tests',
        ['user_id', 'filter_fingerprint'],
        unique=True,
        postgresql_where=sa.text("status = 'active' AND NOT is_deleted"),
    )

    op.create_table(
        'test_questions',
        sa.Column('test_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tests.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('question_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('questions.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('question_order', sa.SmallInteger, nullable=False),
        sa.Column('is_correct', sa.Boolean, nullable=True),
        sa.Column('answered_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('test_id', 'question_order', name='uq_test_question_order'),
    )

    op.create_table(
        'test_question_answers',
        sa.Column('test_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tests.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('question_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('questions.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
        sa.Column('answer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('answers.id', ondelete='CASCADE', onupdate='CASCADE'), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table('test_question_answers')
    op.drop_table('test_questions')
    op.drop_index('uq_tests_user_active_fingerprint', table_name='tests')
    op.drop_index('ix_tests_user_fingerprint_status', table_name='tests')
    op.drop_index('ix_tests_user_created', table_name='tests')
    op.drop_table('tests')
    op.execute("DROP TYPE test_status")
    op.execute("DROP TYPE test_filter_type")

    op.drop_table('user_favorite_questions')
    op.drop_index('ix_answers_question_id', table_name='answers')
    op.drop_table('answers')
    op.drop_index('ix_question_categories_category', table_name='question_categories')
    op.drop_table('question_categories')
    op.drop_index('ix_questions_topic_lang', table_name='questions')
    op.drop_table('questions')
    op.drop_table('categories')
    op.drop_table('topics')
    op.drop_index('ix_user_subscriptions_active_expire', table_name='user_subscriptions')
    op.drop_table('user_subscriptions')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
