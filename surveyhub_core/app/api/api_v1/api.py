from fastapi import APIRouter

from surveyhub_core.app.api.api_v1.endpoints import (
    admin_tools,
    files,
    form_responses,
    forms,
    questions,
    sections,
)

api_router = APIRouter()
api_router.include_router(forms.router, prefix="/forms", tags=["forms"])
api_router.include_router(
    questions.router, prefix="/forms/{form_id}/questions", tags=["questions"]
)
api_router.include_router(
    sections.router, prefix="/forms/{form_id}/sections", tags=["sections"]
)
api_router.include_router(
    form_responses.router, prefix="/forms/{form_id}/responses", tags=["responses"]
)
api_router.include_router(files.router, tags=["files"])
api_router.include_router(admin_tools.router, prefix="/admin", tags=["admin"])
