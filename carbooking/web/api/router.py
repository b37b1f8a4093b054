from fastapi.routing import APIRouter

from carbooking.bookings import endpoints as bookings
from carbooking.identity import endpoints as auth
from carbooking.inventory import endpoints as cars
from carbooking.web.api import monitoring

api_router = APIRouter()
api_router.include_router(monitoring.router)
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(cars.router, prefix="/cars", tags=["cars"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(bookings.admin_router, prefix="/admin", tags=["admin"])
