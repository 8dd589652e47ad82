from sqlalchemy import Column, String

from gtonline.core.database import Base


class School(Base):
    __tablename__ = "schools"

    school_name = Column(String(250), primary_key=True)
    type = Column(String(100), nullable=True)  # high school, university, ...


class Employer(Base):
    __tablename__ = "employers"

    employer_name = Column(String(250), primary_key=True)
