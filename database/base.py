# database/base.py
"""
Declarative base shared by every table model.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
