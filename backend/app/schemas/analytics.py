"""
Pydantic schemas for dashboard analytics.
"""
from pydantic import BaseModel
from typing import Dict, List
from decimal import Decimal


class RestaurantRevenue(BaseModel):
    """Revenue and order count of one restaurant."""
    restaurant_id: int
    name: str
    revenue: Decimal
    orders: int


class DashboardStats(BaseModel):
    """Schema for dashboard statistics."""
    total_orders: int
    total_revenue: Decimal  # Sum of order totals over delivered orders
    avg_order_value: Decimal
    total_restaurants: int = 0
    orders_by_status: Dict[str, int]
    top_restaurants: List[RestaurantRevenue]
