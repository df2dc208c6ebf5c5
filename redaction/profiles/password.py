"""
Password Profile - Default redaction rules.

Masks the value of a ``password`` field in the four textual shapes it takes
on its way to a log line:
    - JSON body:            "password": "secret"
    - key: value text:      password: secret
    - escaped nested JSON:  \\"password\\": \\"secret\\"
    - query string:         password=secret&... or password=secret

Whitespace is spelled ``[\\t\\n\\f\\r ]`` rather than ``\\s``: a vertical tab
(0x0B) is part of a value, not a separator.
"""

from ..base_profile import RuleProfile
from ..rule import Rule, compile_rule


class PasswordProfile(RuleProfile):
    """
    Default profile, used whenever no other rules are configured.

    The two query-string rules are ordered so the ``&``-terminated form runs
    first; the catch-all form would otherwise consume the next parameter.
    """

    @property
    def name(self) -> str:
        return "password"

    @property
    def description(self) -> str:
        return "password values in JSON, key:value, escaped JSON and query strings"

    def get_rules(self) -> list[Rule]:
        return [
            # "password": "value", whitespace after the colon kept
            compile_rule(
                r'"password":([\t\n\f\r ]*)".*?"',
                r'"password":$1"*"',
                name="password_json",
                description="JSON-quoted password field",
            ),

            # password: value
            compile_rule(
                r'password:([\t\n\f\r ]*).*?[^\t\n\f\r ]*',
                r'password:$1*',
                name="password_colon",
                description="Bare key:value password field",
            ),

            # \"password\": \"value\" inside an escaped JSON string
            compile_rule(
                r'\\"password\\":([\t\n\f\r ]*)\\".*?\\"',
                r'\"password\":$1\"*\"',
                name="password_escaped_json",
                description="Backslash-escaped JSON password field",
            ),

            # password=value&next=...
            compile_rule(
                r'password=\w*&',
                r'password=*&',
                name="password_query",
                description="Query-string password followed by another parameter",
            ),

            # password=value at end of string or before a non-word byte
            compile_rule(
                r'password=\w*[^\t\n\f\r ]',
                r'password=*',
                name="password_query_tail",
                description="Query-string password at end of value",
            ),
        ]


# Export the default profile
DEFAULT_PROFILE = PasswordProfile()
