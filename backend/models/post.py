from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class Post(Base):
    """Short update shared by a user, optionally with an image URL"""
    __tablename__ = "posts"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    url = Column(String)  # already-hosted image
    created_at = Column(DateTime, default=datetime.utcnow)
    
    user = relationship("User", back_populates="posts")
    likes = relationship(
        "Like",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Like.id",
        lazy="selectin"
    )
