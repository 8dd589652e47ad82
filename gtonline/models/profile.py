from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship

from gtonline.core.database import Base


class RegularUser(Base):
    __tablename__ = "regular_users"

    email = Column(String(250), ForeignKey("users.email", ondelete="CASCADE"), primary_key=True)
    birthdate = Column(Date, nullable=True)
    sex = Column(String(1), nullable=True)
    current_city = Column(String(250), nullable=True)
    hometown = Column(String(250), nullable=True)

    # Relationships
    user = relationship("User", back_populates="profile")


class Interest(Base):
    __tablename__ = "interests"

    email = Column(String(250), ForeignKey("regular_users.email", ondelete="CASCADE"), primary_key=True)
    interest = Column(String(250), primary_key=True)


class Attend(Base):
    __tablename__ = "attends"

    email = Column(String(250), ForeignKey("regular_users.email", ondelete="CASCADE"), primary_key=True)
    school_name = Column(String(250), ForeignKey("schools.school_name"), primary_key=True)
    year_graduated = Column(Integer, nullable=True)


class Employment(Base):
    __tablename__ = "employments"

    email = Column(String(250), ForeignKey("regular_users.email", ondelete="CASCADE"), primary_key=True)
    employer_name = Column(String(250), ForeignKey("employers.employer_name"), primary_key=True)
    job_title = Column(String(250), nullable=False)
