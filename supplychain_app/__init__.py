"""
Supply chain contracts - Order and Transport ledger logic

Business logic of two contracts running on a permissioned shared ledger:
purchase orders moving from retailer to distributor to production, and
transport shipments with their status history.
"""

__version__ = "0.1.0"
__author__ = "Supply Chain Team"
