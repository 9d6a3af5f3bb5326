# app/reference/routes.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.notes.note_styles import list_note_styles
from app.reference.cpt_codes import list_cpt_codes
from app.reference.icd10_codes import search_icd10
from app.reference.treatment_plans import get_treatment_plan_template, list_problem_areas
from app.users.auth_dependencies import get_current_user

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/icd10")
async def search_icd10_endpoint(
    q: str = "",
    limit: int = Query(15, ge=1, le=200),
) -> List[Dict[str, str]]:
    """Behavioral-health ICD-10 codes matching the query."""
    return search_icd10(q, limit=limit)


@router.get("/cpt")
async def list_cpt_endpoint() -> List[Dict[str, str]]:
    return list_cpt_codes()


@router.get("/note-styles")
async def list_note_styles_endpoint() -> List[Dict[str, str]]:
    return list_note_styles()


@router.get("/treatment-plans")
async def list_treatment_plans_endpoint() -> List[Dict[str, str]]:
    return list_problem_areas()


@router.get("/treatment-plans/{problem}")
async def get_treatment_plan_endpoint(problem: str) -> Dict[str, Any]:
    template = get_treatment_plan_template(problem)
    if template is None:
        raise HTTPException(status_code=404, detail=f"No treatment plan template for '{problem}'")
    return {"id": problem, **template}
