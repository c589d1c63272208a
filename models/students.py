from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from database import Base

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    admission_no = Column(String(50), unique=True, index=True)
    first_name = Column(String(100))
    last_name = Column(String(100), default="")

    # --- ACADEMIC INFO ---
    class_id = Column(Integer, ForeignKey("classes.id"))
    roll_no = Column(Integer, nullable=True)  # Broadsheet row order, NULL sorts last

    status = Column(Boolean, default=True)  # True = active

    class_val = relationship("models.masters.ClassMaster")
