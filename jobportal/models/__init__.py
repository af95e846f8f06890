# Import every model so Base.metadata knows all tables
from jobportal.models.user import User, UserRole  # noqa: F401
from jobportal.models.job_seeker import JobSeeker, Education, Experience, Project, Preferences  # noqa: F401
from jobportal.models.employer import Employer, CompanyRole  # noqa: F401
from jobportal.models.company import Company, CompanySize  # noqa: F401
from jobportal.models.job import Job, JobFormField, JobRole, JobType, JobStatus, FieldType  # noqa: F401
from jobportal.models.application import Application, ApplicationResponse, ApplicationStatus  # noqa: F401
