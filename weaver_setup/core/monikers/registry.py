"""Registry of moniker parsers, one per framework family."""

import re
from typing import Dict, List, Optional, Union

from ..errors import MissingVersionCapture, UnrecognizedMoniker
from .base import TargetFramework, TargetFrameworkMoniker


class RegexMonikerParser:
    """Parses monikers of one framework family using a named-group pattern.

    The pattern must define a ``version`` group holding the version text.
    """

    def __init__(self, framework: TargetFramework, pattern: Union[str, "re.Pattern[str]"]) -> None:
        """Initialize the parser.

        Args:
            framework: Framework family produced by this parser
            pattern: Regular expression with a ``version`` named group
        """
        self.framework = framework
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def parse(self, raw: str) -> Optional[TargetFrameworkMoniker]:
        """Parse ``raw`` into a moniker.

        Args:
            raw: Moniker string such as ``netstandard2.1``

        Returns:
            Parsed moniker, or None if the pattern does not match

        Raises:
            MissingVersionCapture: If the pattern matched without a version
        """
        match = self.pattern.fullmatch(raw)
        if match is None:
            return None

        version = match.groupdict().get("version")
        if not version:
            raise MissingVersionCapture(self.pattern.pattern)

        return TargetFrameworkMoniker.new(self.framework, raw, version)


class MonikerParserRegistry:
    """Ordered registry of moniker parsers; the first match wins."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._parsers: Dict[TargetFramework, RegexMonikerParser] = {}

    def register(self, parser: RegexMonikerParser) -> None:
        """Register a parser, replacing any parser for the same family.

        Args:
            parser: Parser instance to register
        """
        self._parsers[parser.framework] = parser

    def get_supported_frameworks(self) -> List[TargetFramework]:
        """Get registered framework families in matching order."""
        return list(self._parsers.keys())

    def parse(self, raw: str) -> TargetFrameworkMoniker:
        """Parse a moniker string.

        Raises:
            UnrecognizedMoniker: If no registered pattern matches
            MissingVersionCapture: If a pattern is malformed
        """
        for parser in self._parsers.values():
            moniker = parser.parse(raw)
            if moniker is not None:
                return moniker
        raise UnrecognizedMoniker(raw)

    def try_parse(self, raw: str) -> Optional[TargetFrameworkMoniker]:
        """Parse a moniker string, returning None when it is unrecognized."""
        try:
            return self.parse(raw)
        except UnrecognizedMoniker:
            return None

    def parse_many(self, names: List[str]) -> List[TargetFrameworkMoniker]:
        """Parse the recognizable names, skipping the rest.

        Args:
            names: Candidate moniker strings, e.g. folder names

        Returns:
            Monikers in input order
        """
        monikers = []
        for name in names:
            moniker = self.try_parse(name)
            if moniker is not None:
                monikers.append(moniker)
        return monikers
