"""
Employee generation service.

Holds the fixed employee fixtures and the three collection operations used by
the HTTP routes: create one, create ten, delete all.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from empgen.core.config import settings
from empgen.db.store import EmployeeStore
from empgen.models.employee import Employee
from empgen.services.salary import random_salary

logger = logging.getLogger("empgen.services.employee")


DEFAULT_EMPLOYEE = Employee(
    name="Salman",
    salary=1200000,
    language="Full stack",
    city="japan",
    is_manager=False,
)

# (name, language, city, is_manager); salaries are drawn per request
BASE_EMPLOYEES: Tuple[Tuple[str, str, str, bool], ...] = (
    ("Salman", "Full stack", "Japan", False),
    ("Ayesha", "Python", "Delhi", True),
    ("Rahul", "Java", "Mumbai", False),
    ("Neha", "React", "Pune", False),
    ("Vikram", "Angular", "Hyderabad", True),
    ("Arjun", "Node.js", "Bangalore", False),
    ("Meena", "C++", "Chennai", False),
    ("Kiran", "Machine Learning", "Kolkata", True),
    ("Simran", "Data Science", "Jaipur", False),
    ("Ankit", "Full Stack", "Lucknow", True),
)


@dataclass(frozen=True)
class DeletionResult:
    deleted_count: int

    @property
    def found(self) -> bool:
        return self.deleted_count > 0


def _salary_in_configured_range() -> int:
    return random_salary(settings.SALARY_MIN, settings.SALARY_MAX)


def build_employees(salary_fn: Callable[[], int] = _salary_in_configured_range) -> List[Employee]:
    """Build one record per base identity, each with a freshly drawn salary."""
    return [
        Employee(name=name, language=language, city=city, is_manager=is_manager, salary=salary_fn())
        for name, language, city, is_manager in BASE_EMPLOYEES
    ]


async def generate_employee(store: EmployeeStore) -> Employee:
    employee = await store.insert_one(DEFAULT_EMPLOYEE)
    logger.info(f"Generated employee {employee.id}")
    return employee


async def generate_employees(
    store: EmployeeStore,
    salary_fn: Callable[[], int] = _salary_in_configured_range,
) -> List[Employee]:
    employees = await store.insert_many(build_employees(salary_fn))
    logger.info(f"Generated {len(employees)} employees")
    return employees


async def delete_employees(store: EmployeeStore) -> DeletionResult:
    deleted_count = await store.delete_all()
    logger.info(f"Deleted {deleted_count} employees")
    return DeletionResult(deleted_count=deleted_count)
