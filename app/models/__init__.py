from app.models.user import User, UserRole
from app.models.restaurant import Restaurant
from app.models.booking import Booking, BookingStatus, BookingMode
