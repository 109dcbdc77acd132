from fastapi import APIRouter
from app.api.v1.endpoints import orders, order_details

api_router = APIRouter()

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(order_details.router, tags=["order-details"])
