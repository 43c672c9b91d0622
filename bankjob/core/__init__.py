# Statement reconciliation
from .statement import AccountType, Statement

__all__ = ['AccountType', 'Statement']
