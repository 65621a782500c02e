"""Segment and sentence types, and grouping of timed segments into sentences."""

import re
from dataclasses import dataclass
from typing import Iterable

# A segment closes a sentence when its trimmed text ends in . ! or ?
SENTENCE_END = re.compile(r"[.!?]\s*$")


@dataclass(frozen=True)
class Segment:
    """A timed span of transcribed text as returned by the inference provider."""

    start: float
    end: float
    text: str

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        """Create from a provider segment dict (extra keys are ignored)."""
        return cls(
            start=data.get("start") or 0.0,
            end=data.get("end") or 0.0,
            text=data.get("text") or "",
        )


@dataclass(frozen=True)
class Sentence:
    """One or more consecutive segments grouped at a punctuation boundary."""

    sentence: str
    start_time: float
    end_time: float
    duration: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "sentence": self.sentence,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration": self.duration,
        }


def ends_sentence(text: str) -> bool:
    """Check whether a segment's text ends with sentence-terminal punctuation."""
    return SENTENCE_END.search(text.strip()) is not None


def aggregate_sentences(segments: Iterable[Segment]) -> list[Sentence]:
    """Group ordered segments into sentence-level spans.

    Segment texts are concatenated verbatim. A sentence closes on a segment
    whose trimmed text ends in ``.``, ``!`` or ``?``, and the final segment
    always closes whatever is pending. Abbreviations such as "Dr." therefore
    split early.

    Times are carried through unchanged and ``duration`` is not validated, so
    out-of-order input can yield zero or negative durations.

    Args:
        segments: Segments ordered by start time.

    Returns:
        Sentences in order; empty if there are no segments.
    """
    segments = list(segments)
    sentences: list[Sentence] = []
    if not segments:
        return sentences

    current = ""
    sentence_start = segments[0].start
    last_index = len(segments) - 1

    for i, segment in enumerate(segments):
        current += segment.text

        if ends_sentence(segment.text) or i == last_index:
            sentences.append(
                Sentence(
                    sentence=current.strip(),
                    start_time=sentence_start,
                    end_time=segment.end,
                    duration=segment.end - sentence_start,
                )
            )
            if i < last_index:
                current = ""
                sentence_start = segments[i + 1].start

    return sentences
