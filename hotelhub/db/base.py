
from hotelhub.db.session import Base
from hotelhub.models.user import User
from hotelhub.models.hotel import Hotel
from hotelhub.models.room import Room
from hotelhub.models.booking import Booking
from hotelhub.models.operational_log import GeneratorLog, AttendanceLog
