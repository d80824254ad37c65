from fastapi import APIRouter

from luxe_estate.api.routes import auth, contact, inquiries, notifications, properties, realtime, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(properties.router)
api_router.include_router(inquiries.router)
api_router.include_router(users.router)
api_router.include_router(notifications.router)
api_router.include_router(contact.router)
api_router.include_router(realtime.router)
