"""
Core of the property valuation calculator.

Domain models (area units, currencies, prices, mortgage and lease
parameters), pure calculators and JSON contracts. Nothing here depends
on a UI, a database or a network service.
"""
