# user_api/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from user_api.database import get_db
from user_api.schemas.dashboard import DashboardResponse
from user_api.services import user_service

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)):
    """
    Headline numbers for the dashboard:
    {
      "totalUsers": int,
      "averageAge": int or null,   # rounded mean of the ages that are set
      "topCities": [str, ...],     # up to 3, most common first
      "newToday": int,             # rows created since local midnight
      "timestamp": ISO-8601 str
    }
    """
    return {"success": True, "data": user_service.dashboard_stats(db)}
