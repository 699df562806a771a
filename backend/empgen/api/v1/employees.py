from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from empgen.api.deps import get_store
from empgen.db.store import EmployeeStore
from empgen.services.employee_service import (
    BASE_EMPLOYEES,
    delete_employees,
    generate_employee,
    generate_employees,
)

router = APIRouter()

GENERATED_ONE_MESSAGE = "generated successfully"
GENERATED_MANY_MESSAGE = f"✅ {len(BASE_EMPLOYEES)} employees generated successfully!"
DELETED_MESSAGE = "Successfully deleted the empoyees details of {count}"
NOTHING_DELETED_MESSAGE = "No employee record found"


@router.get("/generate", response_class=PlainTextResponse)
async def generate(store: EmployeeStore = Depends(get_store)) -> str:
    """
    Insert the default employee record.
    """
    await generate_employee(store)
    return GENERATED_ONE_MESSAGE


@router.get("/generateMany", response_class=PlainTextResponse)
async def generate_many(store: EmployeeStore = Depends(get_store)) -> str:
    """
    Insert one record per base employee, each with a random salary.
    """
    await generate_employees(store)
    return GENERATED_MANY_MESSAGE


@router.get("/empDelete", response_class=PlainTextResponse)
async def delete_all(store: EmployeeStore = Depends(get_store)) -> str:
    """
    Delete every employee record.
    """
    result = await delete_employees(store)
    if result.found:
        return DELETED_MESSAGE.format(count=result.deleted_count)
    return NOTHING_DELETED_MESSAGE
