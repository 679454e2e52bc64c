# qa_copilot/models/prompt.py
"""
Provider-neutral prompt representation.

Built once per request by the prompt builder and handed to an adapter,
which turns it into its own wire format.
"""
from dataclasses import dataclass, field
from typing import Tuple, Union

from qa_copilot.core.constants import Action


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class ImagePart:
    """Inline image: base64 payload without the data-URI prefix."""
    data: str
    mime_type: str


ContentPart = Union[TextPart, ImagePart]


@dataclass(frozen=True)
class PromptBundle:
    system_instruction: str
    parts: Tuple[ContentPart, ...] = field(default_factory=tuple)
    action: Action = Action.GENERATE
    # Ask the provider for a JSON object instead of free text
    json_output: bool = False

    @property
    def text(self) -> str:
        """All text parts joined, for providers without multipart input."""
        return "\n\n".join(p.text for p in self.parts if isinstance(p, TextPart))

    @property
    def images(self) -> Tuple[ImagePart, ...]:
        return tuple(p for p in self.parts if isinstance(p, ImagePart))
