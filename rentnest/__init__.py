"""
RentNest backend core: FairFlex pricing and schema migrations.
"""

__version__ = "0.1.0"
