"""
Schemas module - Request/Response schemas for API endpoints
and the value objects passed between the notification services.
"""
