"""Repositories — SQLAlchemy implementations of the master-store ports.

Invariants:
    - One repository per table, constructed per request around an AsyncSession
    - Rows never leave a repository: every method returns core/records.py types
    - create() commits; a unique-key violation rolls back and raises ConflictOnInsertError
"""

from payroll_sync.repositories.employee_repository import EmployeeRepository  # noqa: F401
from payroll_sync.repositories.employer_repository import EmployerRepository  # noqa: F401
from payroll_sync.repositories.contribution_repository import ContributionRepository  # noqa: F401
