from .transactions import Transaction
from .documents import DocumentSequence
from .phone_models import PhoneModel

__all__ = [
    'Transaction',
    'DocumentSequence',
    'PhoneModel',
]
