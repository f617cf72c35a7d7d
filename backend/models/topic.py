from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from backend.database import Base

class Topic(Base):
    """Single checkable unit of a learning plan"""
    __tablename__ = "topics"
    
    id = Column(Integer, primary_key=True, index=True)
    learning_plan_id = Column(Integer, ForeignKey("learning_plans.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    position = Column(Integer)
    
    learning_plan = relationship("LearningPlan", back_populates="topics")
