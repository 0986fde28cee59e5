from fleetflow.schemas.common import CamelModel


class AnalyticsRaw(CamelModel):
    revenue: float = 0
    fuel_cost: float = 0
    misc_expenses: float = 0
    maintenance: float = 0
    total_expenses: float = 0
    net_profit: float = 0


class AnalyticsOut(CamelModel):
    """Formatted rupee strings for display, plus the raw numbers for charts."""
    period: str
    revenue: str
    fuel_cost: str
    misc_expenses: str
    maintenance: str
    total_expenses: str
    net_profit: str
    total_trips: int = 0
    completed_trips: int = 0
    completion_rate: int = 0
    total_vehicles: int = 0
    total_drivers: int = 0
    raw: AnalyticsRaw
