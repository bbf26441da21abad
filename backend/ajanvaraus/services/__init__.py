"""
Booking core services:
- time arithmetic (time_utils.py)
- data access (repository.py)
- day resolution (availability.py)
- slot listing and conflict checks (slots.py)
- booking creation and cancellation (bookings.py)
- opening-hours administration (schedule.py)
"""
