"""
Token recovery rules.

The upstream text extractor sometimes splits one field across two tokens
("R" "EPT", "07" "00") or glues the start of the next field onto a token.
Each rule takes the token list and the index of the field being read and
returns a repaired copy, or None when the rule does not apply. Rules never
mutate their input.
"""

from typing import Callable, List, Optional

from patterns import patterns

Tokens = List[str]
RecoveryRule = Callable[[Tokens, int], Optional[Tokens]]


def tokenize_line(line: str) -> Tokens:
    return line.replace(":", "").split()


def merge_next(tokens: Tokens, idx: int) -> Optional[Tokens]:
    """Join the following token onto tokens[idx]."""
    if idx + 1 >= len(tokens):
        return None
    return tokens[:idx] + [tokens[idx] + tokens[idx + 1]] + tokens[idx + 2:]


def complete_keyword(keyword: str) -> RecoveryRule:
    """
    Rebuild a keyword whose tail spilled into the next token.

    Handles "BA" "SE", "R" "EPT", "RE" "PT0545L" and "REP" "T": the tail is
    taken from the start of the next token, which is dropped when empty.
    """

    def rule(tokens: Tokens, idx: int) -> Optional[Tokens]:
        if idx + 1 >= len(tokens):
            return None
        head = tokens[idx]
        if not head or not keyword.startswith(head) or head == keyword:
            return None
        tail = keyword[len(head):]
        nxt = tokens[idx + 1]
        if not nxt.startswith(tail):
            return None
        rest = nxt[len(tail):]
        return tokens[:idx] + [keyword] + ([rest] if rest else []) + tokens[idx + 2:]

    rule.__name__ = f"complete_{keyword.lower()}"
    return rule


def absorb_digit_prefix(tokens: Tokens, idx: int) -> Optional[Tokens]:
    """Move the leading digit run of the next token onto tokens[idx] ("12" "34BOS-ORD")."""
    if idx + 1 >= len(tokens):
        return None
    m = patterns.LEADING_DIGITS.match(tokens[idx + 1])
    if not m:
        return None
    rest = tokens[idx + 1][m.end():]
    return tokens[:idx] + [tokens[idx] + m.group(0)] + ([rest] if rest else []) + tokens[idx + 2:]


def split_after(width: int, longer_than: int) -> RecoveryRule:
    """Cut a token longer than longer_than at width, pushing the surplus into a new following token."""

    def rule(tokens: Tokens, idx: int) -> Optional[Tokens]:
        if idx >= len(tokens) or len(tokens[idx]) <= longer_than:
            return None
        token = tokens[idx]
        return tokens[:idx] + [token[:width], token[width:]] + tokens[idx + 1:]

    rule.__name__ = f"split_after_{width}"
    return rule


def split_route(tokens: Tokens, idx: int) -> Tokens:
    """
    Expand "BOS-ORD" at tokens[idx] into "BOS" "ORD".

    When only one half is present ("BOS" "-ORD", "BOS-" "ORD") the origin
    stays at idx and the destination is taken from the next token without
    its hyphen.
    """
    origin, sep, destination = tokens[idx].partition("-")
    if sep and origin and destination:
        return tokens[:idx] + [origin, destination] + tokens[idx + 1:]
    repaired = tokens[:idx] + [origin] + tokens[idx + 1:]
    if idx + 1 < len(repaired):
        repaired[idx + 1] = repaired[idx + 1].replace("-", "")
    return repaired
