"""
Tests for empgen/services/employee_service.py - fixture data and collection operations.
"""
import pytest

from empgen.core.errors import PersistenceError
from empgen.services.employee_service import (
    BASE_EMPLOYEES,
    DEFAULT_EMPLOYEE,
    build_employees,
    delete_employees,
    generate_employee,
    generate_employees,
)


class TestFixtures:
    """Test the fixed employee data."""

    def test_default_employee_fields(self):
        assert DEFAULT_EMPLOYEE.name == "Salman"
        assert DEFAULT_EMPLOYEE.salary == 1200000
        assert DEFAULT_EMPLOYEE.language == "Full stack"
        assert DEFAULT_EMPLOYEE.city == "japan"
        assert DEFAULT_EMPLOYEE.is_manager is False

    def test_base_employees_are_ten_distinct_identities(self):
        assert len(BASE_EMPLOYEES) == 10
        assert len(set(BASE_EMPLOYEES)) == 10
        assert BASE_EMPLOYEES[0] == ("Salman", "Full stack", "Japan", False)
        assert BASE_EMPLOYEES[-1] == ("Ankit", "Full Stack", "Lucknow", True)

    def test_build_employees_draws_salary_per_record(self):
        """Each record should get its own salary from the generator."""
        salaries = iter(range(1, 11))

        employees = build_employees(lambda: next(salaries))

        assert [e.salary for e in employees] == list(range(1, 11))
        assert [(e.name, e.language, e.city, e.is_manager) for e in employees] == list(BASE_EMPLOYEES)


class TestGenerateEmployee:
    """Test create one."""

    @pytest.mark.asyncio
    async def test_adds_exactly_one_fixed_record(self, memory_store):
        before = await memory_store.count()

        employee = await generate_employee(memory_store)

        assert await memory_store.count() == before + 1
        assert employee.id is not None
        stored = memory_store.records[-1]
        assert stored.model_dump(exclude={"id"}) == DEFAULT_EMPLOYEE.model_dump(exclude={"id"})

    @pytest.mark.asyncio
    async def test_fault_leaves_collection_unchanged(self, memory_store):
        memory_store.fail_on.add("insert_one")

        with pytest.raises(PersistenceError):
            await generate_employee(memory_store)

        assert await memory_store.count() == 0


class TestGenerateEmployees:
    """Test create ten."""

    @pytest.mark.asyncio
    async def test_adds_ten_records_with_salaries_in_range(self, memory_store):
        await generate_employee(memory_store)

        employees = await generate_employees(memory_store)

        assert len(employees) == 10
        assert await memory_store.count() == 11
        identities = set(BASE_EMPLOYEES)
        for employee in employees:
            assert 400000 <= employee.salary <= 5000000
            assert (employee.name, employee.language, employee.city, employee.is_manager) in identities
        assert len({e.id for e in employees}) == 10

    @pytest.mark.asyncio
    async def test_uses_supplied_salary_function(self, memory_store):
        employees = await generate_employees(memory_store, salary_fn=lambda: 999)

        assert {e.salary for e in employees} == {999}

    @pytest.mark.asyncio
    async def test_fault_leaves_collection_unchanged(self, memory_store):
        await generate_employee(memory_store)
        memory_store.fail_on.add("insert_many")

        with pytest.raises(PersistenceError):
            await generate_employees(memory_store)

        assert await memory_store.count() == 1


class TestDeleteEmployees:
    """Test delete all."""

    @pytest.mark.asyncio
    async def test_empty_collection_returns_zero(self, memory_store):
        result = await delete_employees(memory_store)

        assert result.deleted_count == 0
        assert result.found is False

    @pytest.mark.asyncio
    async def test_returns_prior_count(self, memory_store):
        await generate_employees(memory_store)
        await generate_employee(memory_store)

        result = await delete_employees(memory_store)

        assert result.deleted_count == 11
        assert result.found is True
        assert await memory_store.count() == 0
