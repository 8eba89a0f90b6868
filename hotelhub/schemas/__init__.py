
from hotelhub.schemas.common import PaginatedResponse, ErrorResponse, ConflictErrorResponse
from hotelhub.schemas.user import User, UserCreate, UserUpdate, StaffCreate, OwnerCreate, Token, TokenRefresh, Landing, PasswordChange
from hotelhub.schemas.hotel import Hotel, HotelCreate, HotelUpdate, HotelPublic, HostContext, DashboardAccess
from hotelhub.schemas.room import Room, RoomCreate, RoomStatusUpdate, RoomAvailability
from hotelhub.schemas.booking import Booking, BookingCreate, BookingConfirm, HoldSweepResponse
from hotelhub.schemas.operational_log import GeneratorLog, GeneratorLogCreate, AttendanceLog
