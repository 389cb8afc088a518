"""Units app package.

Rentable villas, cottages and rooms. Units are plain CRUD records managed
by administrators; bookings reference them.
"""
