"""Reschedules app package.

Requests to move an existing booking to new dates. A request stays
pending until an administrator approves it (the booking's dates are
overwritten) or declines it (the booking is left alone).
"""
