# user_api/schemas/dashboard.py
from pydantic import BaseModel
from typing import Optional, List


class DashboardStats(BaseModel):
    totalUsers: int
    averageAge: Optional[int] = None
    topCities: List[str] = []
    newToday: int = 0
    timestamp: str


class DashboardResponse(BaseModel):
    success: bool = True
    data: DashboardStats
