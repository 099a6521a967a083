"""Parsing Stage - Extract medication entries from recognized lines.

Heuristic and line based. Each line is scanned by independent token
recognizers (strength, frequency, duration, dosage form); what remains
after removing the tokens is the medication name. Detail-only lines borrow
their name from the next line, and name-only lines borrow details from the
next line.

Lines that look like letterhead or footer fields (doctor, patient, date,
signature, registration, address, phone) are dropped before parsing.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rxint.models import MedicationForm, ParsedMedicationEntry

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Detail tokens found on a prescription line."""

    STRENGTH = "strength"
    FREQUENCY = "frequency"
    DURATION = "duration"
    FORM = "form"


@dataclass(frozen=True)
class Token:
    """A recognized substring of a line."""

    kind: TokenKind
    text: str
    start: int
    end: int


class PatternRecognizer:
    """Recognizes the first match of one regular expression."""

    def __init__(self, kind: TokenKind, pattern: str, flags: int = re.IGNORECASE):
        self.kind = kind
        self.pattern = re.compile(pattern, flags)

    def recognize(self, line: str) -> Optional[Token]:
        match = self.pattern.search(line)
        if match is None:
            return None
        return Token(self.kind, match.group(0), match.start(), match.end())


class LeftmostRecognizer:
    """Combines recognizers of one kind; the leftmost match wins, ties by order."""

    def __init__(self, kind: TokenKind, recognizers: list[PatternRecognizer]):
        self.kind = kind
        self.recognizers = recognizers

    def recognize(self, line: str) -> Optional[Token]:
        best = None
        for recognizer in self.recognizers:
            token = recognizer.recognize(line)
            if token is not None and (best is None or token.start < best.start):
                best = token
        return best


# Quantity immediately followed by a unit; compound unit listed first
STRENGTH_PATTERN = r"\d+(?:\.\d+)?\s?(?:mcg/ml|mcg|mg|ml|iu|g)\b"

FREQUENCY_CODES = [
    "OD", "BD", "BID", "TID", "QID", "HS", "QHS", "PRN", "SOS",
    "Q2H", "Q4H", "Q6H", "Q8H", "Q12H",
]
FREQUENCY_CODE_PATTERN = r"\b(?:" + "|".join(FREQUENCY_CODES) + r")\b"

# Morning-afternoon-evening dose counts (1-0-1), two-slot (1-1) or fractions (1/2)
DOSE_PATTERN = r"\b\d-\d-\d\b|\b\d-\d\b|\b\d/\d\b"

DURATION_PATTERN = r"\b\d+\s*(?:days?|weeks?|months?)\b"

FORM_PATTERN = (
    r"\b(?:tablet|capsule|liquid|injection|syrup|suspension|cream|ointment|patch|inhaler)s?\b"
)
FORM_ALIASES = {
    "tablet": MedicationForm.TABLET,
    "capsule": MedicationForm.CAPSULE,
    "liquid": MedicationForm.LIQUID,
    "syrup": MedicationForm.LIQUID,
    "suspension": MedicationForm.LIQUID,
    "injection": MedicationForm.INJECTION,
    "inhaler": MedicationForm.INHALER,
}

HEADER_PATTERN = re.compile(
    r"^(?:dr|doctor|patient|date|rx|signature|reg|registration|address|tel|phone)\b",
    re.IGNORECASE,
)

# Name ends at a double space or at a space followed by a digit
NAME_BOUNDARY = re.compile(r"\s{2,}|\s\d")
NAME_PUNCTUATION = re.compile(r"^[-,.:;]+|[-,.:;]+$")
MIN_NAME_LENGTH = 3


def default_recognizers() -> list:
    """Strength, frequency, duration and form recognizers in application order."""
    return [
        PatternRecognizer(TokenKind.STRENGTH, STRENGTH_PATTERN),
        LeftmostRecognizer(
            TokenKind.FREQUENCY,
            [
                PatternRecognizer(TokenKind.FREQUENCY, FREQUENCY_CODE_PATTERN),
                PatternRecognizer(TokenKind.FREQUENCY, DOSE_PATTERN),
            ],
        ),
        PatternRecognizer(TokenKind.DURATION, DURATION_PATTERN),
        PatternRecognizer(TokenKind.FORM, FORM_PATTERN),
    ]


def has_letter(text: str) -> bool:
    return any(ch.isalpha() for ch in text)


def is_header_line(line: str) -> bool:
    """Letterhead, patient details and signature lines are not medications."""
    return bool(HEADER_PATTERN.match(line))


def sanitize_name(name: str) -> str:
    """Trim surrounding punctuation and whitespace from a medication name."""
    return NAME_PUNCTUATION.sub("", name.strip()).strip()


def duration_instructions(duration: Optional[Token]) -> Optional[str]:
    return f"For {duration.text}" if duration else None


def medication_form(form: Optional[Token]) -> Optional[MedicationForm]:
    """Map a form word ('Syrup', 'tablets') to its dosage form."""
    if form is None:
        return None
    word = form.text.lower()
    if word.endswith("s"):
        word = word[:-1]
    return FORM_ALIASES.get(word, MedicationForm.OTHER)


@dataclass
class LineTokens:
    """Tokens recognized on one line."""

    strength: Optional[Token] = None
    frequency: Optional[Token] = None
    duration: Optional[Token] = None
    form: Optional[Token] = None

    @property
    def any(self) -> bool:
        """A detail token is present. A form word alone is not a detail."""
        return bool(self.strength or self.frequency or self.duration)

    @property
    def all(self) -> list[Token]:
        return [t for t in (self.strength, self.frequency, self.duration, self.form) if t]


@dataclass
class ParseReport:
    """Entries plus line accounting for the parsing confidence score."""

    entries: list[ParsedMedicationEntry] = field(default_factory=list)
    candidate_lines: int = 0
    parsed_lines: int = 0

    @property
    def success_ratio(self) -> float:
        """Share of candidate lines that contributed to an entry (1.0 if none)."""
        if self.candidate_lines == 0:
            return 1.0
        return min(max(self.parsed_lines / self.candidate_lines, 0.0), 1.0)


class MedicationLineParser:
    """Turns recognized text into candidate medication entries."""

    def __init__(self, recognizers: Optional[list] = None):
        self.recognizers = recognizers or default_recognizers()

    def tokenize(self, line: str) -> LineTokens:
        """Run every recognizer over a line."""
        tokens = LineTokens()
        for recognizer in self.recognizers:
            token = recognizer.recognize(line)
            if token is not None and getattr(tokens, token.kind.value) is None:
                setattr(tokens, token.kind.value, token)
        return tokens

    @staticmethod
    def remainder(line: str, tokens: LineTokens) -> str:
        """Line text with token spans cut out."""
        result = line
        for token in sorted(tokens.all, key=lambda t: t.start, reverse=True):
            result = result[: token.start] + result[token.end :]
        return result.strip()

    @staticmethod
    def candidate_lines(text: str) -> list[str]:
        """Trimmed, non-empty lines with header/footer lines removed."""
        lines = [line.strip() for line in text.splitlines()]
        return [line for line in lines if line and not is_header_line(line)]

    def parse(self, text: str) -> ParseReport:
        """Parse recognized text into medication entries.

        Lines that match nothing are skipped; this never raises on content.
        """
        lines = self.candidate_lines(text)
        tokens = [self.tokenize(line) for line in lines]

        report = ParseReport()
        candidates = {i for i, t in enumerate(tokens) if t.any}
        contributing: set[int] = set()

        i = 0
        while i < len(lines):
            start = i
            line = lines[i]
            line_tokens = tokens[i]
            used = {i}

            strength = ""
            frequency = ""
            instructions = None
            form = medication_form(line_tokens.form)
            name = ""

            maybe_name = self.remainder(line, line_tokens)
            if len(maybe_name) >= MIN_NAME_LENGTH and has_letter(maybe_name):
                name = NAME_BOUNDARY.split(maybe_name, maxsplit=1)[0].strip()
            else:
                next_line = lines[i + 1] if i + 1 < len(lines) else None
                if (
                    next_line
                    and not any(ch.isdigit() for ch in next_line)
                    and len(next_line) >= MIN_NAME_LENGTH
                ):
                    # Detail-only line; the following line carries the name
                    next_tokens = tokens[i + 1]
                    name = self.remainder(next_line, next_tokens) or next_line
                    form = form or medication_form(next_tokens.form)
                    strength = line_tokens.strength.text if line_tokens.strength else ""
                    frequency = line_tokens.frequency.text if line_tokens.frequency else ""
                    instructions = duration_instructions(line_tokens.duration)
                    i += 1
                    used.add(i)
                elif has_letter(maybe_name):
                    name = re.split(r"\s{2,}", line, maxsplit=1)[0]
                # else: only detail tokens and no name-bearing neighbour; dropped

            # Back-fill details from this line, then from one line ahead
            ahead = tokens[i + 1] if i + 1 < len(lines) else LineTokens()
            if not strength:
                if line_tokens.strength:
                    strength = line_tokens.strength.text
                elif ahead.strength:
                    strength = ahead.strength.text
                    used.add(i + 1)
            if not frequency:
                if line_tokens.frequency:
                    frequency = line_tokens.frequency.text
                elif ahead.frequency:
                    frequency = ahead.frequency.text
                    used.add(i + 1)
            if instructions is None:
                instructions = duration_instructions(line_tokens.duration)

            name = sanitize_name(name)
            if name and has_letter(name) and (strength or frequency or instructions):
                report.entries.append(
                    ParsedMedicationEntry(
                        name=name,
                        strength=strength,
                        frequency=frequency,
                        instructions=instructions,
                        form=form,
                        source_line=line,
                    )
                )
                contributing |= used
                logger.debug("Line %d: %s -> %s", start + 1, line, name)
            else:
                logger.debug("Line %d: no medication in %r", start + 1, line)

            i += 1

        report.candidate_lines = len(candidates | contributing)
        report.parsed_lines = len(contributing)
        logger.info(
            "Parsed %d medication entries from %d lines (%d candidates)",
            len(report.entries), len(lines), report.candidate_lines,
        )
        return report

    def parse_entries(self, text: str) -> list[ParsedMedicationEntry]:
        return self.parse(text).entries


def parse_medications(text: str) -> list[ParsedMedicationEntry]:
    """Parse text with the default recognizers."""
    return MedicationLineParser().parse_entries(text)

