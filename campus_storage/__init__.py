"""
Campus Storage Marketplace

Student-to-student storage space listings, availability search and bookings.
"""

__version__ = "1.0.0"
