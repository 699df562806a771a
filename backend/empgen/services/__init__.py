# Services Package
from empgen.services.salary import random_salary
from empgen.services.employee_service import (
    BASE_EMPLOYEES,
    DEFAULT_EMPLOYEE,
    DeletionResult,
    build_employees,
    delete_employees,
    generate_employee,
    generate_employees,
)

__all__ = [
    "random_salary",
    "BASE_EMPLOYEES",
    "DEFAULT_EMPLOYEE",
    "DeletionResult",
    "build_employees",
    "delete_employees",
    "generate_employee",
    "generate_employees",
]
