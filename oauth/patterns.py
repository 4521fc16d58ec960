"""Wildcard pattern compilation with a per-pattern cache"""

import logging
import re
from typing import Dict, Optional, Pattern

logger = logging.getLogger(__name__)

WILDCARD = "*"


def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile a wildcard allowlist entry into an anchored regex

    Every character is literal except "*", which matches any run of
    characters (including none). The whole input must match.

    Args:
        pattern: Raw allowlist entry, e.g. "https://*.example.com/*"

    Returns:
        Compiled regular expression

    Raises:
        re.error: If the resulting expression cannot be compiled
    """
    escaped = re.escape(pattern)
    body = escaped.replace(re.escape(WILDCARD), ".*")
    # \Z, not $: a trailing newline must not match
    return re.compile(rf"\A{body}\Z", re.DOTALL)


class PatternCache:
    """Compiled wildcard patterns keyed by their exact text

    Entries are never evicted; the allowlist is small and fixed at deploy
    time. Compiled patterns are immutable, so concurrent inserts of the same
    key are harmless.
    """

    def __init__(self):
        self._compiled: Dict[str, Pattern[str]] = {}

    def __len__(self) -> int:
        return len(self._compiled)

    def __contains__(self, pattern: str) -> bool:
        return pattern in self._compiled

    def get(self, pattern: str) -> Optional[Pattern[str]]:
        """Return the compiled form of a pattern, compiling it on a miss

        Returns:
            Compiled regex, or None if the pattern cannot be compiled
        """
        compiled = self._compiled.get(pattern)
        if compiled is not None:
            return compiled

        try:
            compiled = compile_pattern(pattern)
        except re.error as e:
            logger.error(f"Failed to compile allowlist pattern {pattern!r}: {e}")
            return None

        self._compiled[pattern] = compiled
        return compiled

    def match(self, uri: str, pattern: str) -> bool:
        """Check whether a URI fully matches a wildcard pattern

        A pattern that fails to compile never matches.
        """
        compiled = self.get(pattern)
        if compiled is None:
            return False
        return compiled.match(uri) is not None
