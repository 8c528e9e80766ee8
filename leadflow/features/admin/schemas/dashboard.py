from pydantic import BaseModel


class TrialCounts(BaseModel):
    total: int
    active: int


class LeadCounts(BaseModel):
    total: int
    today: int


class AdminOverviewResponse(BaseModel):
    subscribers: int
    trials: TrialCounts
    clients: int
    leads: LeadCounts
    revenue: float


class WeeklyReportData(BaseModel):
    businessName: str
    contactName: str
    leadsThisWeek: int
    jobsBooked: int
    revenue: float
    dashboardUrl: str
