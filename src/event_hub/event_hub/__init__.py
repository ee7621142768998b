"""Event Hub package.

This package is organized by feature modules (events, registrations,
analytics, users) with a thin Flask controller layer over service and
repository layers.
"""
