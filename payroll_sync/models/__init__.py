"""ORM Models — SQLAlchemy declarative models for the payroll tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - employee.rssb_number and employer.matricule are unique business keys
    - contribution carries plain string keys (no foreign keys to employee/employer)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all runs
"""

from payroll_sync.models.employee import Employee  # noqa: F401
from payroll_sync.models.employer import Employer  # noqa: F401
from payroll_sync.models.contribution import Contribution  # noqa: F401
