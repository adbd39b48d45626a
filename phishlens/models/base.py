"""Declarative base shared by every PhishLens table."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
