"""
Rule Profiles Package

Bundled redaction rule sets.

Available profiles:
    - password: Default rules masking password values (JSON, key:value,
      escaped JSON, query strings)

To add a new profile:
    1. Create a new file (e.g., tokens.py)
    2. Subclass RuleProfile
    3. Implement get_rules() returning compile_rule(...) results
    4. Build a chain from it with default_chain(profile)
"""

from .password import PasswordProfile, DEFAULT_PROFILE

__all__ = ["PasswordProfile", "DEFAULT_PROFILE"]
