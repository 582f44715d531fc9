"""ORM layer: declarative base plus the bank account and transaction tables."""

from .base import Base, TimestampMixin
from . import models
from .models import BankAccount, Transaction

__all__ = ["Base", "TimestampMixin", "BankAccount", "Transaction", "models"]
