"""initial schema

Revision ID: a1c3e5f7b901
Revises:
Create Date: 2026-10-18 09:12:40.118233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b901'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_LIST = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')

JOB_ROLES = (
    'SOFTWARE_ENGINEER', 'BACKEND_DEVELOPER', 'FRONTEND_DEVELOPER', 'FULLSTACK_DEVELOPER',
    'DATA_SCIENTIST', 'DATA_ANALYST', 'DEVOPS_ENGINEER', 'CLOUD_ENGINEER', 'ML_ENGINEER',
    'AI_ENGINEER', 'MOBILE_DEVELOPER', 'ANDROID_DEVELOPER', 'IOS_DEVELOPER', 'UI_UX_DESIGNER',
    'PRODUCT_MANAGER', 'PROJECT_MANAGER', 'BUSINESS_ANALYST', 'QA_ENGINEER',
    'TEST_AUTOMATION_ENGINEER', 'CYBERSECURITY_ANALYST', 'NETWORK_ENGINEER', 'SYSTEM_ADMIN',
    'DATABASE_ADMIN', 'BLOCKCHAIN_DEVELOPER', 'GAME_DEVELOPER', 'TECH_SUPPORT',
    'CONTENT_WRITER', 'DIGITAL_MARKETER', 'SALES_ASSOCIATE', 'HR_MANAGER',
)

FIELD_TYPES = (
    'TEXT', 'NUMBER', 'EMAIL', 'PHONE', 'LOCATION', 'RESUME_URL', 'TEXTAREA',
    'SELECT', 'MULTISELECT', 'CHECKBOX', 'DATE', 'YEARS_OF_EXPERIENCE',
)

ENUM_NAMES = (
    'application_status', 'field_type', 'job_status', 'job_type', 'job_role',
    'company_role', 'company_size', 'user_role',
)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('JOB_SEEKER', 'EMPLOYER', name='user_role'), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('profile_picture', sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'companies',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('industry', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('website', sa.String(), nullable=True),
        sa.Column('logo', sa.String(), nullable=True),
        sa.Column('size', sa.Enum(
            'STARTUP_1_10', 'SMALL_11_50', 'MEDIUM_51_200', 'LARGE_201_1000', 'ENTERPRISE_1000_PLUS',
            name='company_size'
        ), nullable=True),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('idx_company_is_active', 'companies', ['is_active'], unique=False)

    op.create_table(
        'job_seekers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('resume', sa.String(), nullable=True),
        sa.Column('linkedin', sa.String(), nullable=True),
        sa.Column('github', sa.String(), nullable=True),
        sa.Column('skills', JSON_LIST, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'employers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=True),
        sa.Column('job_title', sa.String(length=100), nullable=True),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('company_role', sa.Enum(
            'ADMIN', 'HR_MANAGER', 'RECRUITER', 'HIRING_MANAGER', name='company_role'
        ), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index(op.f('ix_employers_company_id'), 'employers', ['company_id'], unique=False)

    op.create_table(
        'educations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('seeker_id', sa.Uuid(), nullable=False),
        sa.Column('institution', sa.String(length=200), nullable=False),
        sa.Column('degree', sa.String(length=200), nullable=False),
        sa.Column('field_of_study', sa.String(length=200), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('grade', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['seeker_id'], ['job_seekers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_educations_seeker_id'), 'educations', ['seeker_id'], unique=False)

    op.create_table(
        'experiences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('seeker_id', sa.Uuid(), nullable=False),
        sa.Column('company', sa.String(length=200), nullable=False),
        sa.Column('position', sa.String(length=200), nullable=False),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('is_current', sa.Boolean(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['seeker_id'], ['job_seekers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_experiences_seeker_id'), 'experiences', ['seeker_id'], unique=False)

    op.create_table(
        'projects',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('seeker_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('technologies', JSON_LIST, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('github_url', sa.String(), nullable=True),
        sa.Column('live_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['seeker_id'], ['job_seekers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_projects_seeker_id'), 'projects', ['seeker_id'], unique=False)

    op.create_table(
        'preferences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('seeker_id', sa.Uuid(), nullable=False),
        sa.Column('preferred_roles', JSON_LIST, nullable=False),
        sa.Column('preferred_job_types', JSON_LIST, nullable=False),
        sa.Column('preferred_locations', JSON_LIST, nullable=False),
        sa.Column('salary_expectation_min', sa.Integer(), nullable=True),
        sa.Column('salary_expectation_max', sa.Integer(), nullable=True),
        sa.Column('remote_work', sa.Boolean(), nullable=False),
        sa.Column('willing_to_relocate', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['seeker_id'], ['job_seekers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('seeker_id'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('employer_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('role', sa.Enum(*JOB_ROLES, name='job_role'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('job_type', sa.Enum(
            'FULL_TIME', 'PART_TIME', 'INTERNSHIP', 'CONTRACT', name='job_type'
        ), nullable=False),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('no_of_openings', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'PAUSED', 'COMPLETED', name='job_status'), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['employer_id'], ['employers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_jobs_company_id'), 'jobs', ['company_id'], unique=False)
    op.create_index(op.f('ix_jobs_employer_id'), 'jobs', ['employer_id'], unique=False)
    op.create_index('idx_job_status', 'jobs', ['status'], unique=False)
    op.create_index('idx_job_role', 'jobs', ['role'], unique=False)
    op.create_index('idx_job_created_at', 'jobs', ['created_at'], unique=False)

    op.create_table(
        'job_form_fields',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('label', sa.String(length=200), nullable=False),
        sa.Column('field_type', sa.Enum(*FIELD_TYPES, name='field_type'), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('field_order', sa.Integer(), nullable=False),
        sa.Column('placeholder', sa.String(length=200), nullable=True),
        sa.Column('options', JSON_LIST, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_job_form_fields_job_id'), 'job_form_fields', ['job_id'], unique=False)

    op.create_table(
        'applications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('seeker_id', sa.Uuid(), nullable=False),
        sa.Column('status', sa.Enum(
            'PENDING', 'REVIEWING', 'SHORTLISTED', 'INTERVIEWED', 'ACCEPTED', 'REJECTED', 'WITHDRAWN',
            name='application_status'
        ), nullable=False),
        sa.Column('applied_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['seeker_id'], ['job_seekers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('job_id', 'seeker_id', name='uq_application_job_seeker'),
    )
    op.create_index(op.f('ix_applications_job_id'), 'applications', ['job_id'], unique=False)
    op.create_index(op.f('ix_applications_seeker_id'), 'applications', ['seeker_id'], unique=False)

    op.create_table(
        'application_responses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('application_id', sa.Uuid(), nullable=False),
        sa.Column('field_id', sa.Uuid(), nullable=False),
        sa.Column('answer', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['field_id'], ['job_form_fields.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('application_id', 'field_id', name='uq_response_application_field'),
    )
    op.create_index(
        op.f('ix_application_responses_application_id'), 'application_responses', ['application_id'], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('application_responses')
    op.drop_table('applications')
    op.drop_table('job_form_fields')
    op.drop_table('jobs')
    op.drop_table('preferences')
    op.drop_table('projects')
    op.drop_table('experiences')
    op.drop_table('educations')
    op.drop_table('employers')
    op.drop_table('job_seekers')
    op.drop_table('companies')
    op.drop_table('users')

    # Enum types outlive their tables on PostgreSQL
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name in ENUM_NAMES:
            postgresql.ENUM(name=name).drop(bind, checkfirst=True)
