"""Models package - imports all models for the application"""
from ..extensions import db
from .inventory import Inventory
from .item import Item

__all__ = ['db', 'Inventory', 'Item']
