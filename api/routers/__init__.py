"""
API Routers - Organized endpoint handlers for the Tourbook API.

Each router handles a specific domain:
- bookings: Booking request lifecycle, audit log and calendar
- dashboard: Time-windowed booking statistics
- products: Tour product catalog
"""
