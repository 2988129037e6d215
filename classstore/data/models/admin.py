from sqlalchemy import Column, String
from classstore.data.database import Base

class AdminModel(Base):
    __tablename__ = "admins"
    id = Column(String(36), primary_key=True)
    username = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)
