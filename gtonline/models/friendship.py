from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from gtonline.core.database import Base


class Friendship(Base):
    __tablename__ = "friendships"

    # One row per ordered (requester, recipient) pair
    email = Column(String(250), ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    friend_email = Column(String(250), ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    relationship = Column(String(250), nullable=True)
    date_connected = Column(DateTime(timezone=True), nullable=True)  # NULL while pending

    __table_args__ = (
        Index("idx_friendships_friend_email", "friend_email"),
    )
