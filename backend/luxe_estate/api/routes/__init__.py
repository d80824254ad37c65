from luxe_estate.api.routes import auth, contact, inquiries, notifications, properties, realtime, users

__all__ = [
    "auth",
    "properties",
    "inquiries",
    "users",
    "notifications",
    "contact",
    "realtime",
]
