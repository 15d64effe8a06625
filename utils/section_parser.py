"""
Answer section parsing.
Splits the model's answer into the labelled sections requested by the system prompt,
both for a complete answer and incrementally while tokens stream in.
"""
import re

from models.chat_models import ParsedAnswer, Section
from utils.constants import SECTION_NAMES, Patterns


def parse_sections(text: str) -> ParsedAnswer:
    """Parse a complete answer.

    Markers are only recognised at the start of a line and in capitals. Text before
    the first marker becomes the preamble. An answer with no marker at all is
    returned as the unstructured variant.
    """
    if not text:
        return ParsedAnswer.unstructured("")

    matches = list(re.finditer(Patterns.SECTION_MARKER, text, re.MULTILINE))
    if not matches:
        return ParsedAnswer.unstructured(text)

    sections = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        content = text[match.end():end].lstrip("*").strip()
        sections.append(Section(match.group(1), content))

    return ParsedAnswer(
        structured=True,
        sections=sections,
        preamble=text[:matches[0].start()].strip()
    )


class StreamingSectionTracker:
    """Detects section markers in real-time during streaming.

    Text passes through unchanged. Only the start of a line that could still turn
    into a marker (e.g. "CULT") is held back; once it completes, a section event is
    emitted before the held text is released.
    """

    MARKERS = tuple(name + suffix for name in SECTION_NAMES for suffix in (":", "**:"))
    DECORATION = " \t#*"
    MAX_BUFFER_SIZE = 24

    def __init__(self):
        self.buffer = ""
        self.at_line_start = True
        self.current_section = None

    def _core(self, text: str) -> str:
        return text.lstrip(self.DECORATION)

    def _is_potential_marker(self, text: str) -> bool:
        """Check if text could be the start of a section marker.

        Leading decoration is unbounded in the marker pattern, so only the text
        after it counts against MAX_BUFFER_SIZE.
        """
        core = self._core(text)
        if len(core) > self.MAX_BUFFER_SIZE:
            return False
        if not core:
            return True
        return any(marker.startswith(core) for marker in self.MARKERS)

    def _complete_marker(self, text: str) -> str | None:
        core = self._core(text)
        if core in self.MARKERS:
            return core.rstrip(":").rstrip("*")
        return None

    def process_token(self, token: str) -> list[tuple[str, str]]:
        """Process a single token.

        Returns:
            Events in order: ("section", name) when a marker completes and
            ("text", content) for text that is safe to forward
        """
        events = []
        out = ""

        for ch in token:
            if not self.at_line_start:
                out += ch
                if ch == "\n":
                    self.at_line_start = True
                continue

            self.buffer += ch
            name = self._complete_marker(self.buffer)
            if name:
                if out:
                    events.append(("text", out))
                events.append(("section", name))
                self.current_section = name
                out = self.buffer
                self.buffer = ""
                self.at_line_start = False
            elif not self._is_potential_marker(self.buffer):
                out += self.buffer
                self.buffer = ""
                self.at_line_start = ch == "\n"

        if out:
            events.append(("text", out))
        return events

    def flush(self) -> str:
        """Return any held-back text at the end of the stream."""
        result = self.buffer
        self.buffer = ""
        return result

    def reset(self):
        self.buffer = ""
        self.at_line_start = True
        self.current_section = None
