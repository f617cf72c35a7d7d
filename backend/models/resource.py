from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from backend.database import Base

class Resource(Base):
    """External reference attached to a learning plan"""
    __tablename__ = "resources"
    
    id = Column(Integer, primary_key=True, index=True)
    learning_plan_id = Column(Integer, ForeignKey("learning_plans.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    url = Column(String, nullable=False)
    type = Column(String, nullable=False, default="link")  # "video", "document", "link"
    position = Column(Integer)
    
    learning_plan = relationship("LearningPlan", back_populates="resources")
