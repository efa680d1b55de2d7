"""
lexscope – scope-aware authorization for legal-practice data.

Import path convention::

    from lexscope.application.policy import PolicyEngine, SecureDataAccess
    from lexscope.kernel.security import Action, Scope, PermissionGrant
    from lexscope.adapters.sqlalchemy import SqlAlchemyGrantCatalogue
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
