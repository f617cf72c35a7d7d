from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class LearningPlan(Base):
    """Curriculum of topics and resources for one subject"""
    __tablename__ = "learning_plans"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    subject = Column(String)
    completion_percentage = Column(Float, nullable=False, default=0.0)  # 0-100, derived from topics
    estimated_days = Column(Integer, nullable=False, default=30)
    followers = Column(Integer, nullable=False, default=0)
    following = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # bumped on every UPDATE; a stale write raises StaleDataError
    version = Column(Integer, nullable=False)
    
    user = relationship("User", back_populates="learning_plans")
    topics = relationship(
        "Topic",
        back_populates="learning_plan",
        cascade="all, delete-orphan",
        order_by="Topic.position",
        collection_class=ordering_list("position"),
        lazy="selectin"
    )
    resources = relationship(
        "Resource",
        back_populates="learning_plan",
        cascade="all, delete-orphan",
        order_by="Resource.position",
        collection_class=ordering_list("position"),
        lazy="selectin"
    )
    
    __mapper_args__ = {"version_id_col": version}
