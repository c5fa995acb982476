"""Customers.

Filter lists with ``CustomerListOptions`` (email, role on top of the
usual list options).
"""

from ..models import Customer
from .base import CollectionService


class CustomerService(CollectionService[Customer]):
    base_path = "customers"
    model = Customer
