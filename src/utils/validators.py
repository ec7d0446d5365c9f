"""
Input validation utilities
"""

import re
from typing import Optional, Set, Tuple

LOCALE_CODE_PATTERN = re.compile(r'^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$')


class InputValidator:
    """Command line input validation"""

    @staticmethod
    def validate_batch_size(raw: Optional[str]) -> Tuple[bool, str]:
        """Validate a --batch-size value"""
        if raw is None:
            return True, ""

        try:
            value = int(str(raw).strip())
        except ValueError:
            return False, f"Invalid --batch-size value: {raw}"

        if value <= 0:
            return False, f"Invalid --batch-size value: {raw}"

        return True, ""

    @staticmethod
    def validate_locale_code(code: str) -> Tuple[bool, str]:
        """Validate a locale code such as `de-DE`"""
        if not code or not LOCALE_CODE_PATTERN.match(code):
            return False, f"Invalid locale code: {code!r}"

        return True, ""

    @staticmethod
    def parse_locale_list(raw: Optional[str]) -> Optional[Set[str]]:
        """
        Parse a comma separated --locale value

        Returns:
            Set of locale codes, or None when no restriction was given
        """
        if raw is None:
            return None

        codes = {value.strip() for value in raw.split(',') if value.strip()}
        return codes or None
