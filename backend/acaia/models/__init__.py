"""
Database models
"""
from acaia.models.staff import Staff, StaffSession
from acaia.models.client import Client
from acaia.models.seating_area import SeatingArea
from acaia.models.visit import Visit
from acaia.models.inventory import InventoryItem, StockLedger
from acaia.models.product import Product
from acaia.models.sale import Sale, StaffCommission

__all__ = [
    "Staff",
    "StaffSession",
    "Client",
    "SeatingArea",
    "Visit",
    "InventoryItem",
    "StockLedger",
    "Product",
    "Sale",
    "StaffCommission",
]
