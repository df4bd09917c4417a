"""
Curriculum feature: API routes for the Logbook.
"""

from fastapi import APIRouter, Depends
from supabase import Client

from academy.core.dependencies import get_db, get_current_user_id
from academy.features.curriculum.schemas import LogbookResponse
from academy.features.curriculum.service import CurriculumService

router = APIRouter()


@router.get("/logbook", response_model=LogbookResponse)
async def get_logbook(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_db),
):
    """Trail map: the whole curriculum with completed/locked flags."""
    service = CurriculumService(db)
    return service.get_logbook(user_id)
