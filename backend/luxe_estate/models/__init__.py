from luxe_estate.models.user import SellerApplicationStatus, User, UserRole, WishlistItem
from luxe_estate.models.property import ApprovalStatus, Property
from luxe_estate.models.inquiry import Inquiry, InquiryStatus
from luxe_estate.models.notification import Notification, NotificationType
from luxe_estate.models.contact import ContactInquiry, ContactStatus

__all__ = [
    "User",
    "UserRole",
    "SellerApplicationStatus",
    "WishlistItem",
    "Property",
    "ApprovalStatus",
    "Inquiry",
    "InquiryStatus",
    "Notification",
    "NotificationType",
    "ContactInquiry",
    "ContactStatus",
]
