from fastapi import APIRouter

# Auth
from hotelhub.api.v1.public.auth import router as auth_router

# Public: host resolution, storefront, guest bookings
from hotelhub.api.v1.public.hotels import router as public_hotels_router

# Public: user profile & landing
from hotelhub.api.v1.public.me import router as me_router

# Hotel-scoped (tenant) routes
from hotelhub.api.v1.hotel.hotels import router as hotels_router
from hotelhub.api.v1.hotel.rooms import router as rooms_router
from hotelhub.api.v1.hotel.bookings import router as hotel_bookings_router
from hotelhub.api.v1.hotel.staff import router as staff_router
from hotelhub.api.v1.hotel.logs import generator_router, attendance_router

# Platform admin
from hotelhub.api.v1.admin.hotels import router as admin_router

api_router = APIRouter()

# --- Auth ---
api_router.include_router(auth_router)

# --- Public ---
api_router.include_router(public_hotels_router)
api_router.include_router(me_router)

# --- Hotel ---
api_router.include_router(hotels_router)
api_router.include_router(rooms_router)
api_router.include_router(hotel_bookings_router)
api_router.include_router(staff_router)
api_router.include_router(generator_router)
api_router.include_router(attendance_router)

# --- Admin ---
api_router.include_router(admin_router)
