# src/tweetparser/extractors/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ExtractionResult:
    """
    This is the output shape that all extractors should return.
    `text` is the space-joined `segments` (one per post-text container).
    """
    text: str
    media_links: Tuple[str, ...] = ()
    segments: Tuple[str, ...] = ()

    @property
    def payload(self) -> str:
        # text, newline, space-joined media links
        return f"{self.text}\n{' '.join(self.media_links)}"


class BaseExtractor(ABC):
    """
    Contract for all extractors:
    input: link (url)
    output: ExtractionResult
    """

    @abstractmethod
    async def extract(self, link: str, **kwargs) -> ExtractionResult:
        raise NotImplementedError
