"""
Utilities for interpolating environment variables into configuration text.
"""
import re
from typing import Dict, List

PLACEHOLDER_PATTERN = re.compile(r'\$\{([^}:]+)(?::(-|\+)([^}]*))?\}')


class EnvironmentInterpolator:
    """
    Utility for interpolating environment variables in strings.
    Supports ${VAR}, ${VAR:-default} and ${VAR:+value}.
    """
    @staticmethod
    def interpolate(template: str, context: Dict[str, str]) -> str:
        """
        Interpolates environment variables in the template string using the provided context.

        :param template: The string containing ${VAR} placeholders.
        :param context: The environment variables context.
        :return: The interpolated string.
        :raises KeyError: If a plain ${VAR} is not found in the context.
        """
        missing = EnvironmentInterpolator.missing(template, context)
        if missing:
            raise KeyError(f"Variables not found in context: {', '.join(missing)}")

        def replace(match):
            var_name, modifier, alt_value = match.groups()
            value = context.get(var_name)

            if modifier == '-':
                return value if value else alt_value
            if modifier == '+':
                return alt_value if value else ''
            return value

        return PLACEHOLDER_PATTERN.sub(replace, template)

    @staticmethod
    def missing(template: str, context: Dict[str, str]) -> List[str]:
        """
        Lists plain ${VAR} placeholders that have no value in the context.

        :param template: The string containing ${VAR} placeholders.
        :param context: The environment variables context.
        :return: Names of unresolved variables, in order of appearance.
        """
        names = []
        for match in PLACEHOLDER_PATTERN.finditer(template):
            var_name, modifier, _ = match.groups()
            if modifier is None and var_name not in context and var_name not in names:
                names.append(var_name)
        return names
