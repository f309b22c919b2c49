# txn_summary/data_model/interfaces/__init__.py
"""
Protocols shared by the summary data model.
"""

from .i_to_dict import IToDict, RecursiveDict
from .i_transaction import ITransaction

__all__ = ["IToDict", "ITransaction", "RecursiveDict"]
