from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class User(Base):
    """Platform member who owns and follows learning plans"""
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    first_name = Column(String)
    last_name = Column(String)
    profile_picture = Column(String)  # URL
    created_at = Column(DateTime, default=datetime.utcnow)
    
    learning_plans = relationship(
        "LearningPlan",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    posts = relationship(
        "Post",
        back_populates="user",
        cascade="all, delete-orphan"
    )
