from fastapi import APIRouter

from empgen.api.v1 import employees, pages

api_router = APIRouter()
api_router.include_router(pages.router)
api_router.include_router(employees.router, tags=["employees"])
