"""Beanie ODM schemas for MongoDB collections."""

from .channel import Channel, ChannelRecord, ChannelRecording
from .init import init_beanie_odm
from .role import Role
from .user import Token, User

__all__ = [
    "Channel",
    "ChannelRecord",
    "ChannelRecording",
    "Role",
    "Token",
    "User",
    "init_beanie_odm",
]
