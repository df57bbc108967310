"""
Utility functions and helpers.

Modules:
- log: Leveled console logging
- convert: JSON object <-> nested map conversion
- cache: JSON file cache
- env: .env token management
"""
