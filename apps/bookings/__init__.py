"""Bookings app package.

Holds the booking lifecycle: the ``Booking`` aggregate and its state
machine, lazy completion of finished stays, the ORM-backed store and
the API that drives them. Notifications are produced from the domain
events the aggregate records.
"""
