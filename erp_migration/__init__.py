"""
ERP Migration Runtime

Declarative migration objects for moving master, transactional and
configuration data from ECC-like sources (or Infor ERPs) into an
S/4HANA-like target.

Supports:
- A closed set of field converters and a rule-driven mapping interpreter
- Required, duplicate, fuzzy-duplicate, range and format quality checks
- Extract -> Transform -> Validate -> Load per object, in mock or live mode
- Dependency-ordered waves with bounded concurrency and cancellation
- Read-only adapters for Infor LN, M3, CSI and Lawson (REST or database)
"""

__version__ = "0.1.0"
