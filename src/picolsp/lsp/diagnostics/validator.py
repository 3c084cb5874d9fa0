"""Validator module for picocom command diagnostics.

Pure validation logic: takes a parsed picocom command and returns issues
with offsets into the merged document text.
"""

from __future__ import annotations

from picolsp.lsp.diagnostics import codes
from picolsp.lsp.diagnostics.diagnostic_issue import DiagnosticIssue
from picolsp.lsp.diagnostics.matching import format_suggestion_message, get_suggestions
from picolsp.lsp.filters import split_value_list
from picolsp.lsp.quoting import dequote
from picolsp.lsp.types import ParsedCommand, TokenSpan
from picolsp.picocom.options import (
    MAPPINGS,
    MAPPING_NAMES,
    OptionSpec,
    ValueKind,
    find_option,
    option_labels,
)

# picocom only looks at the first letter of these values
_FIRST_LETTER_OPTIONS = frozenset({"--flow", "--parity"})

_HELP_OPTIONS = frozenset({"--help"})


def validate_command(command: ParsedCommand) -> list[DiagnosticIssue]:
    """
    Validate a picocom command and return diagnostic issues.

    Checks option names, option values, mapping lists and the single
    device argument. Words containing expansions are not checked.
    """
    issues: list[DiagnosticIssue] = []
    positional: list[TokenSpan] = []
    seen_options: set[str] = set()

    tokens = command.tokens[1:]
    options_done = False
    i = 0

    while i < len(tokens):
        token = tokens[i]
        text = dequote(token.text)

        if _is_redirection(token.text):
            # Drop a file-descriptor number glued to the operator, then skip the target
            if positional and _is_fd_prefix(positional[-1], token):
                positional.pop()
            i += 2
            continue

        if options_done or not text.startswith("-") or text == "-":
            positional.append(token)
            i += 1
            continue

        if text == "--":
            options_done = True
            i += 1
            continue

        if text.startswith("--"):
            option = find_option(text)
            if option is None:
                issues.append(_unknown_option(token, text))
                i += 1
                continue
            seen_options.add(option.long)
            i = _check_separate_value(option, tokens, i, issues)
            continue

        # Cluster of short options, e.g. "-lq" or "-b115200"
        next_index = i + 1
        for j in range(1, len(text)):
            spelling = "-" + text[j]
            option = find_option(spelling)
            if option is None:
                issues.append(_unknown_option(token, spelling))
                continue
            seen_options.add(option.long)
            if not option.takes_value:
                continue
            attached = text[j + 1 :]
            if attached:
                issues.extend(_check_value(option, attached, token))
            else:
                next_index = _check_separate_value(option, tokens, i, issues)
            break
        i = next_index

    if not positional and not seen_options & _HELP_OPTIONS:
        program = command.tokens[0]
        issues.append(
            DiagnosticIssue(
                message="No serial device given.",
                start=program.start,
                end=program.end,
                code=codes.MISSING_DEVICE,
            )
        )

    for extra in positional[1:]:
        issues.append(
            DiagnosticIssue(
                message=f"Unexpected argument '{dequote(extra.text)}'; "
                "picocom takes a single device.",
                start=extra.start,
                end=extra.end,
                code=codes.EXTRA_ARGUMENT,
            )
        )

    return issues


def _check_separate_value(
    option: OptionSpec,
    tokens: list[TokenSpan],
    index: int,
    issues: list[DiagnosticIssue],
) -> int:
    """Validate the value following ``tokens[index]``; return the next index."""
    if not option.takes_value:
        return index + 1

    value_index = index + 1
    if value_index < len(tokens) and tokens[value_index].text == "=":
        value_index += 1

    if value_index >= len(tokens):
        token = tokens[index]
        issues.append(
            DiagnosticIssue(
                message=f"Option '{option.long}' requires a value ({option.metavar}).",
                start=token.start,
                end=token.end,
                code=codes.MISSING_VALUE,
            )
        )
        return value_index

    value_token = tokens[value_index]
    issues.extend(_check_value(option, dequote(value_token.text), value_token))
    return value_index + 1


def _check_value(
    option: OptionSpec, value: str, token: TokenSpan
) -> list[DiagnosticIssue]:
    """Validate one option value; ``token`` provides the reported range."""
    if "$" in token.text or "`" in token.text:
        return []

    if option.kind == ValueKind.MAPPING:
        return _check_mappings(option, token)

    if option.kind != ValueKind.CHOICE:
        return []

    if option.long == "--baud":
        # Non-standard rates are accepted where the platform supports them
        if value.isdigit():
            return []
    elif option.long in _FIRST_LETTER_OPTIONS:
        if value[:1].lower() in option.choices:
            return []
    elif value in option.choices:
        return []

    base = f"Invalid value '{value}' for '{option.long}' (expected {option.metavar})"
    return [
        DiagnosticIssue(
            message=format_suggestion_message(
                base, get_suggestions(value, option.choices)
            ),
            start=token.start,
            end=token.end,
            code=codes.INVALID_VALUE,
        )
    ]


def _check_mappings(option: OptionSpec, token: TokenSpan) -> list[DiagnosticIssue]:
    issues: list[DiagnosticIssue] = []
    for name in split_value_list(token.text):
        if name in MAPPINGS:
            continue
        base = f"Unknown mapping '{name}' for '{option.long}'"
        issues.append(
            DiagnosticIssue(
                message=format_suggestion_message(
                    base, get_suggestions(name, MAPPING_NAMES)
                ),
                start=token.start,
                end=token.end,
                code=codes.UNKNOWN_MAPPING,
            )
        )
    return issues


def _unknown_option(token: TokenSpan, spelling: str) -> DiagnosticIssue:
    base = f"Unknown picocom option '{spelling}'"
    return DiagnosticIssue(
        message=format_suggestion_message(
            base, get_suggestions(spelling, option_labels())
        ),
        start=token.start,
        end=token.end,
        code=codes.UNKNOWN_OPTION,
    )


def _is_redirection(raw: str) -> bool:
    return bool(raw) and all(char in "<>" for char in raw)


def _is_fd_prefix(previous: TokenSpan, operator: TokenSpan) -> bool:
    return previous.text.isdigit() and previous.end == operator.start
