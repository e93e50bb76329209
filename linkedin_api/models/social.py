"""
Notification and connection enumerations
"""

from enum import Enum


class NotificationType(str, Enum):
    """Notification type enumeration"""
    LIKE = "like"
    COMMENT = "comment"
    CONNECTION_ACCEPTED = "connectionAccepted"


class RequestStatus(str, Enum):
    """Connection request status enumeration"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ConnectionStatus(str, Enum):
    """Relationship between the current user and another user"""
    CONNECTED = "connected"
    PENDING = "pending"
    RECEIVED = "received"
    NOT_CONNECTED = "not_connected"
