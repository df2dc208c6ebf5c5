"""
Base Rule Profile - Abstract base class for bundled redaction rule sets.

A profile groups the rules that protect one family of secrets so a chain can
be assembled from named, reviewable sets instead of loose patterns. The
built-in password rules live in profiles/password.py.

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_rules(): Returns the compiled rules, in the order they must run
"""

from abc import ABC, abstractmethod

from .rule import Rule


class RuleProfile(ABC):
    """
    Abstract base class for rule profiles.

    Rules returned by a profile are compiled with ``compile_rule`` and are
    expected to compile; a ``CompileError`` from a profile is a defect in the
    shipped rule set and propagates to the caller.

    Example:
        class TokenProfile(RuleProfile):
            @property
            def name(self) -> str:
                return "token"

            @property
            def description(self) -> str:
                return "Bearer tokens in headers"

            def get_rules(self) -> list[Rule]:
                return [
                    compile_rule(
                        r'Bearer [A-Za-z0-9._-]+',
                        'Bearer *',
                        name="bearer",
                    ),
                ]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'password')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""
        pass

    @abstractmethod
    def get_rules(self) -> list[Rule]:
        """Return the profile's rules. Order is significant."""
        pass

    def __repr__(self) -> str:
        return f"<RuleProfile: {self.name}>"
