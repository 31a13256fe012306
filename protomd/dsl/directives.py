"""Opener directive parsing using Lark grammar."""

from functools import lru_cache
from pathlib import Path
from lark import Lark, Transformer, v_args
from pydantic import BaseModel, Field


GRAMMAR_PATH = Path(__file__).parent / "directives.lark"


class Directives(BaseModel):
    """Bare words and key=value settings from an opener line."""
    words: list[str] = Field(default_factory=list)
    settings: dict[str, str] = Field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.settings.get(key, default)


class DirectiveTransformer(Transformer):
    """Transform parse tree to a Directives model."""

    def WORD(self, token):
        return token.value

    @v_args(inline=True)
    def setting(self, key, value):
        return ("setting", key, value)

    @v_args(inline=True)
    def word(self, value):
        return ("word", value)

    def start(self, items):
        directives = Directives()
        for item in items:
            if item[0] == "setting":
                directives.settings[item[1]] = item[2]
            else:
                directives.words.append(item[1])
        return directives


class DirectiveParser:
    """Parser for opener directive strings.

    Raises lark.exceptions.LarkError on malformed input; callers decide how
    lenient to be.
    """

    def __init__(self):
        with open(GRAMMAR_PATH) as f:
            grammar = f.read()
        self.parser = Lark(grammar, parser="lalr", transformer=DirectiveTransformer())

    def parse(self, text: str) -> Directives:
        """Parse a directive string."""
        return self.parser.parse(text)


@lru_cache(maxsize=None)
def get_directive_parser() -> DirectiveParser:
    """Return the shared directive parser, building the grammar on first use."""
    return DirectiveParser()
