
from hotelhub.models.user import User, UserRole
from hotelhub.models.hotel import Hotel, HotelStatus
from hotelhub.models.room import Room, RoomStatus
from hotelhub.models.booking import Booking, BookingStatus
from hotelhub.models.operational_log import GeneratorLog, GeneratorLogType, AttendanceLog
