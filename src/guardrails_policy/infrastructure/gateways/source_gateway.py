"""Source Gateway - routes each file to the parser for its dialect."""

from typing import Optional, Sequence

from guardrails_policy.domain.entities import SourceFile
from guardrails_policy.domain.exceptions import ParseError
from guardrails_policy.domain.protocols import SourceParserProtocol


class SourceGateway:
    """Composite parser: the first gateway that supports a path parses it."""

    def __init__(self, parsers: Sequence[SourceParserProtocol]) -> None:
        self._parsers = list(parsers)

    def parser_for(self, path: str) -> Optional[SourceParserProtocol]:
        for parser in self._parsers:
            if parser.supports(path):
                return parser
        return None

    def supports(self, path: str) -> bool:
        return self.parser_for(path) is not None

    def parse(self, path: str, text: str) -> SourceFile:
        parser = self.parser_for(path)
        if parser is None:
            raise ParseError(path, "no parser for this file type")
        return parser.parse(path, text)
