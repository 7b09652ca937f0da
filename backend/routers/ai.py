from datetime import datetime

from fastapi import APIRouter, Depends

from core.ai_client import generate_summary
from core.clock import get_now
from schemas.summary import SummaryRequest, SummaryResponse

router = APIRouter()


@router.post("/generate-summary", response_model=SummaryResponse, response_model_exclude_none=True)
async def create_summary(payload: SummaryRequest, now: datetime = Depends(get_now)):
    """Item summary from the AI service, or a local template when it is unreachable."""
    return await generate_summary(payload, now=now)
