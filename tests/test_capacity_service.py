"""
Tests für die Kapazitätsberechnung.
"""
from app.models.booking import BookingStatus
from app.services import capacity_service
from app.services.capacity_service import ACTIVE_STATUSES, FIRM_STATUSES
from tests.conftest import make_booking


DATE = "2024-06-01"


class TestAvailableCapacity:

    def test_no_bookings_full_capacity(self):
        """Szenario: Kapazität 50, keine Buchungen -> 50"""
        assert capacity_service.available_capacity([], 1, DATE, 50) == 50

    def test_cancelled_not_counted(self):
        """Szenario: 10 bestätigt + 20 storniert -> 40"""
        bookings = [
            make_booking(party_size=10, status=BookingStatus.CONFIRMED),
            make_booking(party_size=20, status=BookingStatus.CANCELLED),
        ]
        assert capacity_service.available_capacity(bookings, 1, DATE, 50) == 40

    def test_rejected_not_counted(self):
        bookings = [make_booking(party_size=8, status=BookingStatus.REJECTED)]
        assert capacity_service.available_capacity(bookings, 1, DATE, 50) == 50

    def test_pending_counted_in_active_view(self):
        bookings = [
            make_booking(party_size=5, status=BookingStatus.PENDING),
            make_booking(party_size=5, status=BookingStatus.CONFIRMED),
        ]
        assert capacity_service.available_capacity(bookings, 1, DATE, 50, ACTIVE_STATUSES) == 40

    def test_pending_not_counted_in_firm_view(self):
        bookings = [
            make_booking(party_size=5, status=BookingStatus.PENDING),
            make_booking(party_size=5, status=BookingStatus.CONFIRMED),
        ]
        assert capacity_service.available_capacity(bookings, 1, DATE, 50, FIRM_STATUSES) == 45

    def test_other_restaurant_and_date_ignored(self):
        bookings = [
            make_booking(restaurant_id=2, party_size=30),
            make_booking(date="2024-06-02", party_size=30),
        ]
        assert capacity_service.available_capacity(bookings, 1, DATE, 50) == 50

    def test_never_negative(self):
        bookings = [make_booking(party_size=30), make_booking(party_size=30)]
        assert capacity_service.available_capacity(bookings, 1, DATE, 50) == 0

    def test_missing_capacity_uses_default(self):
        bookings = [make_booking(party_size=10)]
        assert capacity_service.available_capacity(bookings, 1, DATE, None) == 40


class TestBookedCapacity:

    def test_sums_party_sizes(self):
        bookings = [make_booking(party_size=3), make_booking(party_size=4)]
        assert capacity_service.booked_capacity(bookings, 1, DATE) == 7


class TestHasAvailability:

    def test_full_restaurant(self):
        bookings = [make_booking(party_size=4)]
        assert capacity_service.has_availability(bookings, 1, DATE, 4) is False

    def test_pending_does_not_block_guests(self):
        bookings = [make_booking(party_size=4, status=BookingStatus.PENDING)]
        assert capacity_service.has_availability(bookings, 1, DATE, 4) is True


class TestCapacityOptions:

    def test_steps_of_five(self):
        assert capacity_service.capacity_options(20) == [5, 10, 15, 20]

    def test_rounds_up(self):
        assert capacity_service.capacity_options(12) == [5, 10, 15]

    def test_custom_step(self):
        assert capacity_service.capacity_options(6, step=2) == [2, 4, 6]
