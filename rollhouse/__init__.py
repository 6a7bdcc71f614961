"""
                Rollhouse Ordering Backend

Order intake, persistence and SMS / email notification service
for the Rollhouse food-ordering website.
"""

__version__ = "1.0.0"
