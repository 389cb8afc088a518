"""
Shared Kernel

Base classes and utilities shared by the booking, reschedule and feedback
contexts: entities and aggregates, domain events, value objects, the actor
model, domain errors and the unit of work / message bus pair that publishes
events after commit.
"""
