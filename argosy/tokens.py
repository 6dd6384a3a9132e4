r"""
Argosy token classifier.

Purpose
- Label one raw token of the input stream against a Schema so the resolver knows
  whether it starts an option, is a value, or is a failed flag attempt.

Kinds
- LONG_FLAG:    '--name' where 'name' is a declared long name.
- SHORT_GROUP:  '-abc' where every character is a declared short name; expands to
                the matching options left to right, as if '-a -b -c' had been typed
                at the same position.
- UNRECOGNISED: '--name' where 'name' is not declared (a flag attempt).
- LITERAL:      everything else, including negative numbers ('-1', '-.5'), unknown
                short spellings ('-xyz'), and the bare '-' and '--' tokens.

Negative numbers
- The numeric check runs before the short-name lookup, so '-1' is a literal even if
  '1' were ever declared as a short name.
"""
import re
from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    LONG_FLAG = "long-flag"
    SHORT_GROUP = "short-group"
    UNRECOGNISED = "unrecognised"
    LITERAL = "literal"


class Token(NamedTuple):
    """
    One classified token.

    - kind: TokenKind
    - text: the raw token as typed
    - index: 0-based position in the input stream
    - options: matched options (one for LONG_FLAG, one per character for SHORT_GROUP,
      empty otherwise)
    """
    kind: TokenKind
    text: str
    index: int
    options: tuple = ()

    @property
    def flag(self):
        """True for tokens that end a value run (matched or unrecognised flags)."""
        return self.kind is not TokenKind.LITERAL


# '-1', '-1.5', '-.5', '-1e3', '-0x1f' all start with a digit or '.digit'
_NUMERIC = re.compile(r"-\.?\d")


def classify(schema, tokens, index, /):
    """
    Classify tokens[index] against the schema.

    Returns
    - Token with kind, raw text, index and matched options.
    """
    token = tokens[index]

    if token.startswith("--") and len(token) > 2:
        if (option := schema.long(token[2:])) is not None:
            return Token(TokenKind.LONG_FLAG, token, index, (option,))
        return Token(TokenKind.UNRECOGNISED, token, index)

    if token.startswith("-") and len(token) > 1 and not token.startswith("--"):
        if _NUMERIC.match(token):
            return Token(TokenKind.LITERAL, token, index)
        if (options := schema.shorts(token[1:])) is not None:
            return Token(TokenKind.SHORT_GROUP, token, index, options)

    return Token(TokenKind.LITERAL, token, index)


def literals(schema, tokens, start, /):
    """
    Return the run of LITERAL tokens beginning at 'start' (possibly empty).

    The run stops at the first token that classifies as a flag (declared or
    unrecognised) or at the end of the stream.
    """
    run = []
    for index in range(start, len(tokens)):
        if (token := classify(schema, tokens, index)).flag:
            break
        run.append(token)
    return tuple(run)


__all__ = (
    "TokenKind",
    "Token",
    "classify",
    "literals",
)
