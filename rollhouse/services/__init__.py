"""
                        Services Module

Contains the business logic behind the order API.

Services:
    - orders: order intake, queries, status updates and statistics
    - store: order persistence
    - notifications: Twilio SMS, SendGrid email and push stub
    - phone: phone number normalization
"""

from rollhouse.services.phone import format_phone_e164

__all__ = ["format_phone_e164"]
