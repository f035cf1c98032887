# ================================
# API PACKAGE INITIALIZATION (api/__init__.py)
# ================================

"""
API Package

Root package for all API routes
"""

API_VERSION = "1.0.0"
API_DESCRIPTION = """
Student storage marketplace API

## Features
- Search storage spaces by type, size, price, campus area, amenities, radius and dates
- Listings managed by their hosts, soft-deleted when removed
- Booking requests with server-side pricing and a host-driven lifecycle
- Reviews after completed bookings

## Authentication
- Bearer JWT access tokens issued by the identity provider
- Profiles are created on first authenticated request
"""

__all__ = ["API_VERSION", "API_DESCRIPTION"]
